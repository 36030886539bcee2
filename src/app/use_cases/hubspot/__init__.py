"""Use cases específicos de HubSpot."""

from ._contact_event import ALLOWED_SUBSCRIPTION_TYPES, build_crm_properties
from .process_contact_event import ContactEventResult, ProcessContactEventUseCase

__all__ = [
    "ALLOWED_SUBSCRIPTION_TYPES",
    "ContactEventResult",
    "ProcessContactEventUseCase",
    "build_crm_properties",
]
