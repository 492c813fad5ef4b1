# Services for the restoration application.
# Modules are imported directly (restoration.services.validation_service, ...)
# to keep the validator <-> store imports free of cycles.
