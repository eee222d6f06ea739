"""
Modelli SQLAlchemy / SQLAlchemy models.
Importare qui tutti i modelli per registrarli sul metadata.
Import all models here so they are registered on the metadata.
"""

from rentsync.models.car import Car, CarCategory, CarCondition, CarStatus, FuelType, Transmission
from rentsync.models.client import Client, ClientStatus, ClientType
from rentsync.models.agent import Agent, AgentStatus
from rentsync.models.contract import DIRECT_OFFICE, Contract, ContractStatus, PhotoKind
from rentsync.models.lead import LeadSource, LeadStatus, MarketingLead
from rentsync.models.company import COMPANY_PROFILE_ID, CompanyProfile

__all__ = [
    "Car",
    "CarCategory",
    "CarCondition",
    "CarStatus",
    "FuelType",
    "Transmission",
    "Client",
    "ClientStatus",
    "ClientType",
    "Agent",
    "AgentStatus",
    "DIRECT_OFFICE",
    "Contract",
    "ContractStatus",
    "PhotoKind",
    "LeadSource",
    "LeadStatus",
    "MarketingLead",
    "COMPANY_PROFILE_ID",
    "CompanyProfile",
]
