"""
azlist/client/credential.py - Azure 자격 증명 생성

Terraform 스타일의 ARM_* 인증 환경변수를 azure-identity가 인식하는
AZURE_* 이름으로 매핑한 뒤 DefaultAzureCredential을 생성합니다.
"""

from __future__ import annotations

import logging
import os
from collections.abc import MutableMapping

from azure.core.credentials import TokenCredential
from azure.identity import DefaultAzureCredential

from azlist.config import settings

from .cloud import CloudConfig

logger = logging.getLogger(__name__)

# 테넌트 ID를 인자로 받는 DefaultAzureCredential 소스별 키워드
TENANT_ID_KWARGS = (
    "interactive_browser_tenant_id",
    "shared_cache_tenant_id",
    "visual_studio_code_tenant_id",
    "workload_identity_tenant_id",
)


def apply_arm_env_aliases(environ: MutableMapping[str, str] | None = None) -> list[str]:
    """ARM_* 환경변수를 AZURE_* 로 복사

    Args:
        environ: 대상 환경 (기본: os.environ)

    Returns:
        설정된 AZURE_* 변수 이름 목록
    """
    env = os.environ if environ is None else environ
    applied: list[str] = []
    for arm_name, azure_name in settings.ARM_ENV_ALIASES.items():
        if arm_name in env:
            env[azure_name] = env[arm_name]
            applied.append(azure_name)
    if applied:
        logger.debug(f"ARM 인증 환경변수 매핑: {', '.join(applied)}")
    return applied


def build_credential(cloud: CloudConfig) -> TokenCredential:
    """DefaultAzureCredential 생성

    AZURE_TENANT_ID(또는 ARM_TENANT_ID)가 설정되어 있으면 테넌트를 직접 받는
    자격 증명 소스에도 같은 테넌트를 지정합니다. (EnvironmentCredential은 스스로 읽음)

    Args:
        cloud: 클라우드 환경 (인증 호스트 결정)

    Returns:
        TokenCredential
    """
    apply_arm_env_aliases()

    kwargs: dict[str, str] = {"authority": cloud.authority_host}
    tenant_id = os.environ.get("AZURE_TENANT_ID")
    if tenant_id:
        logger.debug(f"자격 증명 테넌트 지정: {tenant_id}")
        for name in TENANT_ID_KWARGS:
            kwargs[name] = tenant_id
    return DefaultAzureCredential(**kwargs)
