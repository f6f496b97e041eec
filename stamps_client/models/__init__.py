"""Typed domain records and their wire tables."""

from stamps_client.models.address import Address, Credentials
from stamps_client.models.base import WireModel
from stamps_client.models.customs import Customs, CustomsLine
from stamps_client.models.rate import AddOns, AddOnV9, AddOnV17, Rate
from stamps_client.models.requests import (
    AuthenticateUser,
    CancelRequest,
    CarrierPickup,
    CleanseAddress,
    GetAccountInfo,
    GetPostageStatus,
    GetPurchaseStatus,
    GetRates,
    IndiciumRequest,
    ManifestRequest,
    PurchasePostage,
    ReprintRequest,
    TrackShipment,
)

__all__ = [
    "AddOnV9",
    "AddOnV17",
    "AddOns",
    "Address",
    "AuthenticateUser",
    "CancelRequest",
    "CarrierPickup",
    "CleanseAddress",
    "Credentials",
    "Customs",
    "CustomsLine",
    "GetAccountInfo",
    "GetPostageStatus",
    "GetPurchaseStatus",
    "GetRates",
    "IndiciumRequest",
    "ManifestRequest",
    "PurchasePostage",
    "Rate",
    "ReprintRequest",
    "TrackShipment",
    "WireModel",
]
