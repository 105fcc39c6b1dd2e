"""Domain-specific exceptions"""

SCENARIO_ANALYSIS_FAILED_MESSAGE = "Senaryo analizi yapılırken hata oluştu"


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class DataFetchError(DomainException):
    """Finance store failed to return accounts, transactions, fixed expenses or credits"""

    pass


class PersistenceError(DomainException):
    """Finance store failed to persist a forecast record"""

    pass


class InvalidScenarioParametersError(DomainException, ValueError):
    """Scenario multipliers or projection horizon are out of range"""

    pass


class ScenarioNotFoundError(DomainException):
    """No predefined scenario matches the requested name"""

    pass


class ScenarioAnalysisError(DomainException):
    """Scenario analysis failed; the only error kind surfaced to callers of analyze()"""

    def __init__(self, message: str = SCENARIO_ANALYSIS_FAILED_MESSAGE):
        super().__init__(message)
