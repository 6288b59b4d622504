from .registration import Registration, RegistrationManager

__all__ = ["Registration", "RegistrationManager"]
