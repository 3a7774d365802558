"""
azlist/client - Azure API 어댑터

코어 로직이 의존하는 네트워크 협력자(Protocol)와
Azure SDK 기반 구현을 제공합니다.
"""

from .base import ChildPage, ListerClient, ListingClient, SeedPage, SeedQueryClient
from .client import AzureClient, get_client_kwargs
from .cloud import CLOUDS, CloudConfig, get_cloud
from .credential import apply_arm_env_aliases, build_credential

__all__: list[str] = [
    # 인터페이스
    "SeedQueryClient",
    "ListingClient",
    "ListerClient",
    "SeedPage",
    "ChildPage",
    # 구현
    "AzureClient",
    "get_client_kwargs",
    # 환경
    "CloudConfig",
    "CLOUDS",
    "get_cloud",
    "apply_arm_env_aliases",
    "build_credential",
]
