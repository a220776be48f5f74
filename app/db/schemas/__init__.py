# app/db/schemas/__init__.py
from .base_schema import *
from .patient_schema import *
from .medical_record_schemas import *
from .appointment_schemas import *
from .principal_schemas import *
from .common_schemas import *
