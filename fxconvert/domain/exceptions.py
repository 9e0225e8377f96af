class CurrencyException(Exception):
    """Base class for every error raised by the conversion core"""
    pass


class InvalidCurrencyCodeError(CurrencyException):
    """Raised when a currency code is not exactly three letters"""
    def __init__(self, code: object):
        self.code = code
        super().__init__(f"Invalid currency code: {code!r} (must be 3 letters)")


class InvalidAmountError(CurrencyException):
    """Raised when an amount is negative or non-finite, on input or after conversion"""
    def __init__(self, amount: object, reason: str = "must be a non-negative number"):
        self.amount = amount
        self.reason = reason
        super().__init__(f"Invalid amount: {amount!r} ({reason})")


class UnknownCurrencyError(CurrencyException):
    """Raised when a currency is absent from an otherwise valid rate table"""
    def __init__(self, code: str, base: str | None = None):
        self.code = code
        self.base = base
        if base:
            message = f"Currency code not supported: {code} (no rate against {base})"
        else:
            message = f"Currency code not supported: {code}"
        super().__init__(message)


class ProviderError(CurrencyException):
    """A single upstream provider failed; the next provider may still succeed"""
    def __init__(self, provider: str, message: str):
        self.provider = provider
        super().__init__(f"{provider}: {message}")


class ProviderUnavailableError(ProviderError):
    def __init__(self, provider: str, status: int | None = None, reason: str | None = None):
        self.status = status
        self.reason = reason
        if status is not None:
            message = f"HTTP {status}"
        else:
            message = f"request failed ({reason or 'unknown error'})"
        super().__init__(provider, message)


class ProviderMalformedResponseError(ProviderError):
    def __init__(self, provider: str, reason: str):
        self.reason = reason
        super().__init__(provider, f"malformed response: {reason}")


class AllProvidersExhaustedError(CurrencyException):
    """Every configured provider failed for one fetch"""
    def __init__(self, last_error: ProviderError, errors: list[tuple[str, ProviderError]] | None = None):
        self.last_error = last_error
        self.last_provider = last_error.provider
        self.errors = list(errors or [(last_error.provider, last_error)])
        super().__init__(f"All API endpoints failed: {last_error}")
