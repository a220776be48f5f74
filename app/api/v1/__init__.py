from .auth_deps import *
from .auth_router import *
from .patient_router import *
from .worker_router import *
from .local_patient_router import *
from .medical_record_router import *
from .appointment_router import *
from .patient_records_router import *
