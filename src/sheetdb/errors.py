"""Exceptions raised by SheetDB."""


class SheetDBError(Exception):
    """Base exception for SheetDB errors."""


class DocumentError(SheetDBError):
    """The underlying document could not be opened, parsed or written."""


class SheetNotFoundError(SheetDBError):
    """Exception raised when a requested sheet is not in the document."""

    def __init__(self, sheet_name: str):
        self.sheet_name = sheet_name
        super().__init__(f'Sheet "{sheet_name}" not found')


class SheetAlreadyExistsError(SheetDBError):
    """Exception raised when creating a sheet whose name is taken."""

    def __init__(self, sheet_name: str):
        self.sheet_name = sheet_name
        super().__init__(f'Sheet "{sheet_name}" already exists')


class ColumnAlreadyExistsError(SheetDBError):
    """Exception raised when adding a column that is already in the schema."""

    def __init__(self, column_name: str):
        self.column_name = column_name
        super().__init__(f'Column "{column_name}" already exists')


class ColumnNotFoundError(SheetDBError):
    """Exception raised when removing a column that is not in the schema."""

    def __init__(self, column_name: str):
        self.column_name = column_name
        super().__init__(f'Column "{column_name}" not found')
