"""Read and write site settings, with built-in defaults for the camp profile."""

from __future__ import annotations

import copy
import logging
from typing import Any, Iterable

from django.db import transaction  # type: ignore

from shared.exceptions import NotFoundError, ServiceError

from .models import SiteConfig

logger = logging.getLogger(__name__)

CAMP_INFO_KEY = "camp_info"

DEFAULT_CAMP_INFO: dict[str, Any] = {
    "name": "长白山双溪森林营地",
    "slogan": "在自然中探索，在冰雪中成长",
    "description": (
        "长白山双溪森林营地位于长白山北坡，依托得天独厚的自然资源，为游客提供丰富的户外体验活动。"
        "冬季可体验滑雪、雪圈、冰雪徒步等项目；夏季可参与森林徒步、野外探险等活动。"
    ),
    "location": {
        "address": "吉林省延边朝鲜族自治州安图县二道白河镇",
        "coordinates": {"lat": 42.0389, "lng": 128.0619},
    },
    "contact": {"phone": "131-9620-1942", "name": "郑长岭", "wechat": "shuangxi_camp"},
    "features": [
        {"icon": "mountain", "title": "得天独厚", "description": "位于长白山北坡核心区域，自然风光优美"},
        {"icon": "snowflake", "title": "冰雪乐园", "description": "冬季积雪期长达5个月，雪质优良"},
        {"icon": "shield", "title": "安全保障", "description": "专业教练团队，完善的安全措施"},
        {"icon": "users", "title": "贴心服务", "description": "酒店接送，全程陪同，省心省力"},
    ],
    "service_flow": [
        {"step": 1, "title": "在线预约", "description": "通过微信表单提交预约信息"},
        {"step": 2, "title": "确认行程", "description": "工作人员联系确认详细安排"},
        {"step": 3, "title": "支付定金", "description": "支付100元/人定金确认预约"},
        {"step": 4, "title": "酒店接送", "description": "9:00酒店大堂集合出发"},
        {"step": 5, "title": "畅玩体验", "description": "专业教练带领畅玩各项活动"},
        {"step": 6, "title": "安全返回", "description": "16:00送返酒店，结束愉快行程"},
    ],
    "gallery": [],
}


def config_map(group: str | None = None) -> dict[str, Any]:
    configs = SiteConfig.objects.all()
    if group:
        configs = configs.filter(group=group)
    return {config.key: config.value for config in configs}


def get_config(key: str) -> Any:
    config = SiteConfig.objects.filter(key=key).first()
    if config is not None:
        return config.value
    if key == CAMP_INFO_KEY:
        return copy.deepcopy(DEFAULT_CAMP_INFO)
    raise NotFoundError(f"Setting {key!r} does not exist.", code="CONFIG_NOT_FOUND")


def save_config(key: str, value: Any, label: str | None = None, group: str | None = None) -> SiteConfig:
    defaults: dict[str, Any] = {"value": value}
    if label is not None:
        defaults["label"] = label
    if group is not None:
        defaults["group"] = group
    config, created = SiteConfig.objects.update_or_create(key=key, defaults=defaults)
    logger.info("Site setting %s %s", key, "created" if created else "updated")
    return config


@transaction.atomic
def save_configs(configs: Iterable[dict[str, Any]]) -> list[SiteConfig]:
    return [
        save_config(item["key"], item.get("value"), item.get("label"), item.get("group"))
        for item in configs
    ]


def delete_config(key: str) -> None:
    deleted, _ = SiteConfig.objects.filter(key=key).delete()
    if not deleted:
        raise NotFoundError(f"Setting {key!r} does not exist.", code="CONFIG_NOT_FOUND")


def get_camp_info() -> dict[str, Any]:
    """Stored camp profile laid over the defaults."""
    camp_info = copy.deepcopy(DEFAULT_CAMP_INFO)
    stored = SiteConfig.objects.filter(key=CAMP_INFO_KEY).values_list("value", flat=True).first()
    if isinstance(stored, dict):
        camp_info.update(stored)
    return camp_info


def save_camp_info(data: Any) -> dict[str, Any]:
    if not isinstance(data, dict) or not data.get("name"):
        raise ServiceError("Camp name is required.", code="INVALID_DATA")
    save_config(CAMP_INFO_KEY, data, label="营地信息", group="about")
    return get_camp_info()
