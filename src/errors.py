class PaymentError(Exception):
    """Base class for failures outside the ledger core. All of them end the run."""


class InvalidCliArgument(PaymentError):
    def __str__(self) -> str:
        return f"Invalid cli argument: {super().__str__()}"


class FileError(PaymentError):
    def __str__(self) -> str:
        return f"File error: {super().__str__()}"


class CsvParseError(PaymentError):
    def __init__(self, message: str, line_number: int = 0):
        super().__init__(message)
        self.line_number = line_number

    def __str__(self) -> str:
        if self.line_number:
            return f"CSV parse error on line {self.line_number}: {super().__str__()}"
        return f"CSV parse error: {super().__str__()}"
