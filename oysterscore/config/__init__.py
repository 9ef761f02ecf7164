from .rating_params import (
    DEFAULT_RATING_PARAMS,
    PublicationParams,
    RatingParams,
    TrustRampParams,
    VerdictScaleParams,
    VoteWeightParams,
    get_rating_params,
)
from .settings import (
    CONFIG_PATH_ENV,
    DatabaseSettings,
    LoggingSettings,
    Settings,
    load_settings,
)

__all__ = [
    "DEFAULT_RATING_PARAMS",
    "PublicationParams",
    "RatingParams",
    "TrustRampParams",
    "VerdictScaleParams",
    "VoteWeightParams",
    "get_rating_params",
    "CONFIG_PATH_ENV",
    "DatabaseSettings",
    "LoggingSettings",
    "Settings",
    "load_settings",
]
