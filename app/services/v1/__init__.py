from .token_service import *
from .credential_store import *
from .conflict_checker import *
from .referential_validator import *
from .patient_service import *
from .medical_record_service import *
from .appointment_service import *
from .worker_service import *
from .bootstrap import *
