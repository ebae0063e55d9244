from __future__ import annotations


class DashboardError(Exception):
    """Base class for errors surfaced to the user at the upload boundary."""


class MissingSheetError(DashboardError):
    def __init__(self, sheet_name: str):
        self.sheet_name = sheet_name
        super().__init__(f'Sheet "{sheet_name}" not found')


class MalformedFileError(DashboardError):
    def __init__(self, message: str = "Could not read the file as a spreadsheet."):
        super().__init__(message)


class NoDataLoadedError(DashboardError):
    def __init__(self, message: str = "No spreadsheet loaded. Upload a file first."):
        super().__init__(message)
