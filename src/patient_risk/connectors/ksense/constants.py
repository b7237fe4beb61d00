"""Ksense assessment API paths and record field names."""

PATIENTS_PATH = "/patients"
SUBMIT_PATH = "/submit-assessment"
API_KEY_HEADER = "x-api-key"

# Raw record fields
PATIENT_ID = "patient_id"
NAME = "name"
AGE = "age"
GENDER = "gender"
BLOOD_PRESSURE = "blood_pressure"
TEMPERATURE = "temperature"
VISIT_DATE = "visit_date"
DIAGNOSIS = "diagnosis"
MEDICATIONS = "medications"
