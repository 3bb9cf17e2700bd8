"""Category checks combined by the score calculator."""

from .credit import CreditScoreCheck, CreditScoreConfig
from .fraud import FraudCheck, FraudConfig
from .income import IncomeCheck, IncomeConfig
from .records import RecordCheck, bankruptcy_check, criminal_check, evictions_check

__all__ = [
    "CreditScoreCheck",
    "CreditScoreConfig",
    "FraudCheck",
    "FraudConfig",
    "IncomeCheck",
    "IncomeConfig",
    "RecordCheck",
    "bankruptcy_check",
    "criminal_check",
    "evictions_check",
]
