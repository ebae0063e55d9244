import asyncio

import pytest

from conftest import NICK_VALUES, put, workbook_bytes
from core.errors import MalformedFileError, NoDataLoadedError
from core.layout import LATEST_COL, PRIMARY_ROWS
from core.market import MarketPrices
from core.session import UploadSession


def test_latest_load_wins(full_workbook):
    session = UploadSession()
    first = session.begin_load()
    second = session.begin_load()
    assert second > first

    fresh = session.load_bytes(second, full_workbook, "new.xlsx")
    assert fresh.accepted
    stale = session.load_bytes(first, full_workbook, "old.xlsx")
    assert not stale.accepted
    assert session.data.source_name == "new.xlsx"


def test_stale_failure_does_not_clear_data(full_workbook):
    session = UploadSession()
    old = session.begin_load()
    new = session.begin_load()
    session.load_bytes(new, full_workbook, "good.xlsx")
    outcome = session.load_bytes(old, b"garbage", "bad.xlsx")
    assert not outcome.accepted
    assert outcome.error_type == "MalformedFileError"
    assert session.data is not None
    assert session.error is None


def test_current_failure_drops_previous_data(full_workbook):
    session = UploadSession()
    session.load_bytes(session.begin_load(), full_workbook, "good.xlsx")
    outcome = session.load_bytes(session.begin_load(), b"garbage", "bad.xlsx")
    assert outcome.accepted
    assert outcome.error_type == "MalformedFileError"
    assert session.data is None
    assert session.error == str(MalformedFileError())
    with pytest.raises(NoDataLoadedError):
        session.require_data()


def test_async_load(full_workbook):
    session = UploadSession()

    async def read_bytes():
        return full_workbook

    outcome = asyncio.run(session.load(read_bytes, "Finances.xlsx"))
    assert outcome.accepted
    assert outcome.request_id == 1
    assert session.data.nick.net_assets_usd == NICK_VALUES["net_assets_usd"]


def test_async_load_overtaken_by_newer_upload(full_workbook):
    session = UploadSession()

    async def run():
        gate = asyncio.Event()

        async def slow_read():
            await gate.wait()
            return full_workbook

        async def fast_read():
            return full_workbook

        slow = asyncio.ensure_future(session.load(slow_read, "slow.xlsx"))
        await asyncio.sleep(0)
        fast = await session.load(fast_read, "fast.xlsx")
        gate.set()
        return await slow, fast

    slow, fast = asyncio.run(run())
    assert fast.accepted
    assert not slow.accepted
    assert session.data.source_name == "fast.xlsx"


def test_metrics_use_session_market(full_workbook):
    session = UploadSession(market=MarketPrices(btc_price=100_000.0))
    session.load_bytes(session.begin_load(), full_workbook, "Finances.xlsx")
    assert session.metrics().btc_value_usd == pytest.approx(NICK_VALUES["btc_holdings"] * 100_000)
    session.set_market(MarketPrices(btc_price=50_000.0))
    assert session.metrics().btc_value_usd == pytest.approx(NICK_VALUES["btc_holdings"] * 50_000)


def test_clear():
    session = UploadSession()
    session.clear()
    with pytest.raises(NoDataLoadedError):
        session.metrics()


def test_same_pick_is_not_reloaded(full_workbook):
    session = UploadSession()
    first = session.load_selection("pick-1", full_workbook, "Finances.xlsx")
    assert first.accepted
    assert session.load_selection("pick-1", full_workbook, "Finances.xlsx") is None
    assert session.latest_request_id == first.request_id


def test_new_pick_with_same_name_and_size_reloads(full_grid):
    original = workbook_bytes(full_grid)
    put(full_grid, PRIMARY_ROWS["net_assets_usd"], LATEST_COL, 29_000_000)
    edited = workbook_bytes(full_grid)

    session = UploadSession()
    session.load_selection("pick-1", original, "Finances.xlsx")
    outcome = session.load_selection("pick-2", edited, "Finances.xlsx")
    assert outcome is not None and outcome.accepted
    assert session.data.nick.net_assets_usd == 29_000_000


def test_clear_forgets_loaded_pick(full_workbook):
    session = UploadSession()
    session.load_selection("pick-1", full_workbook, "Finances.xlsx")
    session.clear()
    assert session.load_selection("pick-1", full_workbook, "Finances.xlsx") is not None
    assert session.data is not None
