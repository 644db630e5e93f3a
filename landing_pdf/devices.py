from dataclasses import dataclass
from typing import Dict, Iterable, Tuple


@dataclass(frozen=True)
class DeviceProfile:
    name: str
    width: int
    height: int
    device_scale_factor: float
    is_mobile: bool
    has_touch: bool

    @property
    def label(self) -> str:
        return f"{self.name.capitalize()} ({self.width}×{self.height})"


DEVICE_PROFILES: Dict[str, DeviceProfile] = {
    "desktop": DeviceProfile("desktop", 1440, 900, 2, is_mobile=False, has_touch=False),
    "tablet": DeviceProfile("tablet", 768, 1024, 2, is_mobile=True, has_touch=True),
    "mobile": DeviceProfile("mobile", 375, 667, 2, is_mobile=True, has_touch=True),
}

DEFAULT_DEVICE = "desktop"

# Served to tablet and mobile so sites pick their mobile layout
MOBILE_USER_AGENT = (
    "Mozilla/5.0 (iPhone; CPU iPhone OS 13_2_3 like Mac OS X) "
    "AppleWebKit/605.1.15 (KHTML, like Gecko) Version/13.0.3 Mobile/15E148 Safari/604.1"
)


def get_profile(name: str) -> DeviceProfile:
    return DEVICE_PROFILES[name]


def filter_device_names(tokens: Iterable[str]) -> Tuple[str, ...]:
    """Keep known device names (first occurrence wins), falling back to desktop."""
    seen = []
    for t in tokens:
        t = t.strip().lower()
        if t in DEVICE_PROFILES and t not in seen:
            seen.append(t)
    return tuple(seen) or (DEFAULT_DEVICE,)


def context_options(profile: DeviceProfile) -> dict:
    """Keyword arguments for browser.new_context() emulating the profile."""
    opts = {
        "viewport": {"width": profile.width, "height": profile.height},
        "device_scale_factor": profile.device_scale_factor,
        "is_mobile": profile.is_mobile,
        "has_touch": profile.has_touch,
    }
    if profile.is_mobile:
        opts["user_agent"] = MOBILE_USER_AGENT
    return opts
