"""Reputation use cases."""

from .equip_badge import EquipBadgeRequest, EquipBadgeResponse, EquipBadgeUseCase
from .get_user_points import (
    CategoryPointsItem,
    GetUserPointsRequest,
    GetUserPointsResponse,
    GetUserPointsUseCase,
)
from .initialize_rookie_badges import (
    InitializeRookieBadgesRequest,
    InitializeRookieBadgesResponse,
    InitializeRookieBadgesUseCase,
)
from .login_decay import LoginDecayRequest, LoginDecayResponse, LoginDecayUseCase

__all__ = [
    "CategoryPointsItem",
    "EquipBadgeRequest",
    "EquipBadgeResponse",
    "EquipBadgeUseCase",
    "GetUserPointsRequest",
    "GetUserPointsResponse",
    "GetUserPointsUseCase",
    "InitializeRookieBadgesRequest",
    "InitializeRookieBadgesResponse",
    "InitializeRookieBadgesUseCase",
    "LoginDecayRequest",
    "LoginDecayResponse",
    "LoginDecayUseCase",
]
