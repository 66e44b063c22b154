"""
TLS Assessor

Drives SSL Labs assessments to completion and relays the resulting report
for a hostname.
"""

__version__ = "0.1.0"
__author__ = "TLS Assessor"
__email__ = "support@example.com"

from .config import Settings
from .exceptions import AssessmentError
from .models import AssessmentRequest, Endpoint, Host, Info, QuotaState
from .polling import AssessmentEngine
from .ssllabs_client import SSLLabsClient

__all__ = [
    "Settings",
    "SSLLabsClient",
    "AssessmentEngine",
    "AssessmentRequest",
    "AssessmentError",
    "Host",
    "Endpoint",
    "Info",
    "QuotaState",
]
