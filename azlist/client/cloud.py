"""
azlist/client/cloud.py - Azure 클라우드 환경 설정

지원 환경: public, china, usgovernment
"""

from __future__ import annotations

from dataclasses import dataclass

from azure.identity import AzureAuthorityHosts

from azlist.exceptions import ConfigurationError


@dataclass(frozen=True)
class CloudConfig:
    """클라우드 환경별 엔드포인트

    Attributes:
        name: 환경 이름
        authority_host: Entra ID 인증 호스트
        resource_manager: ARM 엔드포인트
    """

    name: str
    authority_host: str
    resource_manager: str

    @property
    def scope(self) -> str:
        """ARM 토큰 스코프"""
        return f"{self.resource_manager.rstrip('/')}/.default"


CLOUDS: dict[str, CloudConfig] = {
    "public": CloudConfig(
        name="public",
        authority_host=AzureAuthorityHosts.AZURE_PUBLIC_CLOUD,
        resource_manager="https://management.azure.com",
    ),
    "china": CloudConfig(
        name="china",
        authority_host=AzureAuthorityHosts.AZURE_CHINA,
        resource_manager="https://management.chinacloudapi.cn",
    ),
    "usgovernment": CloudConfig(
        name="usgovernment",
        authority_host=AzureAuthorityHosts.AZURE_GOVERNMENT,
        resource_manager="https://management.usgovcloudapi.net",
    ),
}


def get_cloud(name: str) -> CloudConfig:
    """환경 이름으로 CloudConfig 조회 (대소문자 무시)

    Raises:
        ConfigurationError: 알 수 없는 환경
    """
    cloud = CLOUDS.get(name.lower())
    if cloud is None:
        raise ConfigurationError("env", f"알 수 없는 환경입니다: {name!r} (가능: {', '.join(CLOUDS)})")
    return cloud
