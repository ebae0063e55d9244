import logging
from contextlib import contextmanager
from typing import Any, Dict, List, Optional

import altair as alt
import pandas as pd
import streamlit as st

from core.charts import DEBT_PALETTE, debt_vs_net_worth, donut_chart, horizontal_bars, net_worth_bar
from core.derive import derive_metrics
from core.formatting import NA, format_currency, format_currency_columns, format_full_currency, format_pct, format_ratio
from core.market import DEFAULT_AUD_RATE, DEFAULT_BTC_PRICE, normalize_market_prices
from core.metrics_assets import compute_assets
from core.metrics_bitcoin import compute_bitcoin
from core.metrics_debt import compute_debt
from core.metrics_family import compute_family
from core.metrics_liquidity import compute_liquidity
from core.metrics_overview import compute_overview
from core.metrics_stress import compute_stress
from core.session import UploadSession

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
alt.data_transformers.disable_max_rows()

STATUS_COLORS = {
    "SAFE": "#10b981",
    "SURVIVABLE": "#10b981",
    "Free & Clear": "#10b981",
    "WARNING": "#f59e0b",
    "High LTV": "#f59e0b",
    "Leveraged": "#3b82f6",
    "DANGER": "#ef4444",
    "Underwater": "#ef4444",
}


# ---------- UI / layout helpers ----------
def inject_base_styles():
    if st.session_state.get("_base_css_injected"):
        return
    st.markdown(
        """
        <style>
        .card {border: 1px solid #e5e7eb;border-radius: 12px;padding: 16px;background: #ffffff;
               box-shadow: 0 1px 2px rgba(0,0,0,0.04); margin-bottom: 12px;}
        .card-title {font-weight: 600;font-size: 1.0rem;color: #111827;margin-bottom: 8px;}
        .badge {border-radius: 10px;padding: 2px 8px;font-size: 0.75rem;font-weight: 600;color: #ffffff;}
        </style>
        """,
        unsafe_allow_html=True,
    )
    st.session_state["_base_css_injected"] = True


@contextmanager
def card(title: str):
    container = st.container()
    container.markdown(f"<div class='card'><div class='card-title'>{title}</div>", unsafe_allow_html=True)
    body = container.container()
    with body:
        yield body
    container.markdown("</div>", unsafe_allow_html=True)


def badge(status: Optional[str]) -> str:
    status = status or NA
    color = STATUS_COLORS.get(status, "#64748b")
    return f"<span class='badge' style='background:{color}'>{status}</span>"


def render_stat_cards(cards: List[Dict[str, Any]]):
    cols = st.columns(len(cards))
    for col, c in zip(cols, cards):
        col.metric(c["title"], c["display"], help=c.get("subtitle") or None)
        if c.get("subtitle"):
            col.caption(c["subtitle"])


def render_ratio_cards(ratios: List[Dict[str, Any]]):
    cols = st.columns(len(ratios))
    for col, r in zip(cols, ratios):
        col.metric(r["title"], r["display"])
        col.markdown(f"{badge(r['status'])} <span style='color:#64748b;font-size:0.8rem'>{r['target']}</span>", unsafe_allow_html=True)


def render_progress(label: str, value: float, share: Optional[float]):
    pct = min(max(share or 0.0, 0.0), 1.0)
    suffix = f" ({pct * 100:.1f}%)" if share is not None else ""
    st.markdown(f"**{label}** · {format_currency(value)}{suffix}")
    st.progress(pct)


# ---------- Upload ----------
def get_session() -> UploadSession:
    if "upload_session" not in st.session_state:
        st.session_state["upload_session"] = UploadSession()
    return st.session_state["upload_session"]


def handle_upload(session: UploadSession, uploaded) -> None:
    session.load_selection(uploaded.file_id, uploaded.getvalue(), uploaded.name)


# ---------- Pages ----------
def render_overview(data, market):
    payload = compute_overview(data, market)
    render_stat_cards(payload["cards"])
    c1, c2 = st.columns(2)
    metrics = derive_metrics(data.nick, market)
    with c1:
        with card("Asset Composition"):
            if metrics.asset_composition:
                st.altair_chart(donut_chart(metrics.asset_composition), use_container_width=True)
            else:
                st.info("No positive asset balances.")
    with c2:
        with card("Net Worth Trend (USD)"):
            if data.nick.history.net_worth:
                st.altair_chart(net_worth_bar(data.nick.history.net_worth), use_container_width=True)
            else:
                st.info("No historical net worth values found.")
    render_ratio_cards(payload["ratios"])
    if payload["defaulted_fields"]:
        with st.expander("Fields using default values"):
            st.write(payload["defaulted_fields"])


def render_debt(data, market):
    payload = compute_debt(data, market)
    metrics = derive_metrics(data.nick, market)
    cols = st.columns(4)
    cols[0].metric("Total Debt", payload["cards"][0]["display"])
    for col, r in zip(cols[1:], payload["ratios"]):
        col.metric(r["title"], r["display"])
        col.markdown(badge(r["status"]), unsafe_allow_html=True)
    c1, c2 = st.columns(2)
    with c1:
        with card("Debt Breakdown"):
            if metrics.debt_composition:
                st.altair_chart(donut_chart(metrics.debt_composition, DEBT_PALETTE), use_container_width=True)
    with c2:
        with card("Debt Maturity Profile"):
            for bucket in payload["maturity"]:
                render_progress(bucket["name"], bucket["value"], bucket["share"])
    with card("Debt vs Net Worth Growth"):
        if data.nick.history.net_worth:
            st.altair_chart(debt_vs_net_worth(data.nick.history.net_worth, data.nick.history.debt), use_container_width=True)
    with card("Largest Debt Positions"):
        for row in payload["largest_positions"]:
            render_progress(row["label"], row["value"], row["share"])


def render_liquidity(data, market):
    payload = compute_liquidity(data, market)
    metrics = derive_metrics(data.nick, market)
    cols = st.columns(3)
    cols[0].metric("Liquid Assets", payload["cards"][0]["display"], help=payload["cards"][0]["subtitle"])
    for col, r in zip(cols[1:], payload["ratios"]):
        col.metric(r["title"], r["display"])
        col.markdown(badge(r["status"]), unsafe_allow_html=True)
    c1, c2 = st.columns(2)
    with c1:
        with card("Cash Runway"):
            months = payload["runway"]["months"]
            st.metric("Months of runway", months if months is not None else NA)
            st.caption(f"Monthly expenses (est.): {format_currency(payload['runway']['monthly_expenses'])}")
    with c2:
        with card("Liquidity Breakdown"):
            st.altair_chart(horizontal_bars(metrics.liquidity_breakdown), use_container_width=True)
            share = payload["btc_share_of_liquid"]
            st.warning(
                f"Bitcoin ({format_pct(share * 100 if share is not None else None)} of liquid) is highly volatile. "
                "In a crisis, actual liquidity may be lower."
            )


def render_assets(data, market):
    payload = compute_assets(data, market)
    render_stat_cards(payload["cards"])
    cols = st.columns(3)
    for i, h in enumerate(payload["holdings"]):
        cols[i % 3].metric(h["title"], format_currency(h["value"]), help=h["subtitle"])
    with card("Property Portfolio"):
        df = pd.DataFrame(payload["properties"])
        if df.empty:
            st.info("No properties.")
        else:
            df["ltv"] = df["ltv"].apply(lambda v: f"{v:.0f}%" if pd.notna(v) else NA)
            df["mortgage"] = df["mortgage"].apply(lambda v: format_currency(v) if v > 0 else "-")
            st.dataframe(format_currency_columns(df, ["value", "equity"]), hide_index=True, use_container_width=True)


def render_bitcoin(data, market):
    payload = compute_bitcoin(data, market)
    c1, c2 = st.columns(2)
    c1.metric("Bitcoin Holdings", f"{payload['holdings']:.3f} BTC", delta=format_currency(payload["value_usd"]), delta_color="off")
    c2.metric("Price", f"${payload['price']:,.0f}")
    cols = st.columns(3)
    cols[0].metric("% of Net Worth", format_pct(payload["percent_of_net"]))
    cols[0].progress((payload["percent_of_net_bar"] or 0.0) / 100)
    cols[0].caption(f"Recommended: <{payload['percent_of_net_recommended_max']:.0f}%")
    cols[1].metric("% of Liquid Assets", format_pct(payload["percent_of_liquid"]))
    cols[1].progress((payload["percent_of_liquid_bar"] or 0.0) / 100)
    cols[1].caption(f"Recommended: <{payload['percent_of_liquid_recommended_max']:.0f}%")
    with cols[2]:
        st.markdown("**Volatility Impact**")
        for name, move in payload["moves"].items():
            sign = "+" if move >= 0 else "-"
            st.markdown(f"If {name}: {sign}{format_currency(abs(move))}")
    with card("BTC Storage Breakdown"):
        cols = st.columns(len(payload["storage"]))
        for col, item in zip(cols, payload["storage"]):
            col.markdown(f"**{item['name']}**  \n{item['subtitle']}")


def render_stress(data, market):
    payload = compute_stress(data, market)
    st.caption(
        "Simulations showing how net worth would be affected by market downturns, "
        "to check whether worst-case scenarios are survivable without forced liquidations."
    )
    cols = st.columns(len(payload["scenarios"]) or 1)
    for col, s in zip(cols, payload["scenarios"]):
        col.markdown(f"**{s['name']}** {badge(s['status'])}", unsafe_allow_html=True)
        col.caption(s["description"])
        col.metric("Impact", format_currency(s["impact"]))
        col.metric("New Net Worth", format_currency(s["resulting_net_worth"]))
        d2e = s["resulting_debt_to_equity"]
        col.metric("New D/E", f"{d2e:.2f}x" if d2e is not None else NA)
    v = {row["title"]: row for row in payload["vulnerabilities"]}
    c1, c2 = st.columns(2)
    with c1:
        with card("Key Vulnerabilities"):
            re_row = v["Real Estate Concentration"]
            share = re_row["share_of_assets"]
            st.markdown(
                f"- **Real Estate Concentration:** RE makes up {format_pct(share * 100 if share is not None else None)} of assets. "
                f"A 30% RE crash would wipe out {format_currency(re_row['loss'])}."
            )
            st.markdown(f"- **Margin Loan Risk:** {format_currency(v['Margin Loan Risk']['loss'])} is callable.")
            st.markdown(f"- **BTC Volatility:** A 70% BTC crash would cost {format_currency(v['BTC Volatility']['loss'])}.")
    with c2:
        with card("Protective Factors"):
            st.markdown(f"- **Strong Equity Buffer:** {format_currency(payload['protective']['equity_buffer'])} net worth.")
            months = payload["protective"]["runway_months"]
            st.markdown(f"- **Long Runway:** {months if months is not None else NA} months of expenses covered by liquid assets.")


def render_household(payload: Dict[str, Any]):
    render_stat_cards(payload["cards"])
    m = payload["metrics"]
    coverage = m["liability_coverage"]
    st.markdown(
        f"Liquid share of assets: **{format_pct(m['liquid_share'] * 100 if m['liquid_share'] is not None else None)}** · "
        f"Liquidity covers liabilities: **{f'{coverage:.0f}x' if coverage is not None else NA}**"
    )
    c1, c2 = st.columns(2)
    c1.metric("Debt-to-Equity", format_ratio(m["debt_to_equity"]))
    with c2:
        render_progress("Illiquid Assets", payload["illiquid_assets"], m["illiquid_share"])


# ---------- UI setup ----------
st.set_page_config(page_title="Family Financial Dashboard", layout="wide")
inject_base_styles()
st.title("Family Financial Dashboard")

session = get_session()

with st.sidebar:
    st.markdown("### Spreadsheet")
    uploaded = st.file_uploader("Upload Finances_XXXX_EOFY.xlsx", type=["xlsx", "xls"])
    if uploaded is not None:
        handle_upload(session, uploaded)
    else:
        session.clear()

    st.markdown("---")
    st.markdown("### Current Market Prices")
    btc_price = st.number_input("BTC Price (USD)", min_value=0.0, value=DEFAULT_BTC_PRICE, step=1000.0)
    aud_rate = st.number_input("AUD/USD Rate", min_value=0.0, value=DEFAULT_AUD_RATE, step=0.01, format="%.2f")
    market = normalize_market_prices({"btc_price": btc_price, "aud_rate": aud_rate})
    session.set_market(market)

    st.markdown("---")
    entity = st.radio("Entity", ["Nick (NWB)", "Poppy", "Mom (MMB)"], index=0)

if session.error:
    st.error(session.error)
if session.data is None:
    st.info("Upload your spreadsheet to view your financial overview.")
    st.stop()

data = session.data
st.caption(f"{data.source_name} • All values in USD (AUD/USD: {market.aud_rate})")

if entity == "Mom (MMB)":
    render_household(compute_family(data)["mom"])
elif entity == "Poppy":
    render_household(compute_family(data)["poppy"])
else:
    tabs = st.tabs(["Overview", "Debt & Leverage", "Liquidity & Solvency", "Assets", "Bitcoin", "Stress Tests"])
    with tabs[0]:
        render_overview(data, market)
    with tabs[1]:
        render_debt(data, market)
    with tabs[2]:
        render_liquidity(data, market)
    with tabs[3]:
        render_assets(data, market)
    with tabs[4]:
        render_bitcoin(data, market)
    with tabs[5]:
        render_stress(data, market)
    st.caption(f"Net worth {format_full_currency(data.nick.net_assets_usd)} as of the latest column.")
