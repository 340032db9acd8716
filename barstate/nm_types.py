"""Network manager value types and the pure logic built on them."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, Mapping, Optional, Sequence, Tuple, Union

WIRELESS_SECTION = "802-11-wireless"
WIRELESS_SECURITY_SECTION = "802-11-wireless-security"
CONNECTION_SECTION = "connection"
VPN_SECTION = "vpn"

Settings = Mapping[str, Mapping[str, Any]]


class DeviceType(Enum):
    """Kind of network device."""

    ETHERNET = "ethernet"
    WIFI = "wifi"
    BLUETOOTH = "bluetooth"
    TUN_TAP = "tun_tap"
    WIREGUARD = "wireguard"
    GENERIC = "generic"
    OTHER = "other"
    UNKNOWN = "unknown"

    @classmethod
    def from_code(cls, code: int) -> "DeviceType":
        """Map a numeric device type to its kind."""
        known = {
            1: cls.ETHERNET,
            2: cls.WIFI,
            5: cls.BLUETOOTH,
            14: cls.GENERIC,
            16: cls.TUN_TAP,
            29: cls.WIREGUARD,
        }
        if code in known:
            return known[code]
        if 3 <= code <= 32:
            return cls.OTHER
        return cls.UNKNOWN


class ActiveConnectionState(Enum):
    """Lifecycle state of an active connection."""

    UNKNOWN = "unknown"
    ACTIVATING = "activating"
    ACTIVATED = "activated"
    DEACTIVATING = "deactivating"
    DEACTIVATED = "deactivated"

    @classmethod
    def from_code(cls, code: int) -> "ActiveConnectionState":
        return {
            1: cls.ACTIVATING,
            2: cls.ACTIVATED,
            3: cls.DEACTIVATING,
            4: cls.DEACTIVATED,
        }.get(code, cls.UNKNOWN)


class ConnectivityState(Enum):
    """How far the host can reach the network."""

    NONE = "none"
    PORTAL = "portal"
    LOSS = "loss"
    FULL = "full"
    UNKNOWN = "unknown"

    @classmethod
    def from_code(cls, code: int) -> "ConnectivityState":
        return {
            1: cls.NONE,
            2: cls.PORTAL,
            3: cls.LOSS,
            4: cls.FULL,
        }.get(code, cls.UNKNOWN)


class DeviceState(Enum):
    """State of a network device."""

    UNMANAGED = "unmanaged"
    UNAVAILABLE = "unavailable"
    DISCONNECTED = "disconnected"
    PREPARE = "prepare"
    CONFIG = "config"
    NEED_AUTH = "need_auth"
    IP_CONFIG = "ip_config"
    IP_CHECK = "ip_check"
    SECONDARIES = "secondaries"
    ACTIVATED = "activated"
    DEACTIVATING = "deactivating"
    FAILED = "failed"
    UNKNOWN = "unknown"

    @classmethod
    def from_code(cls, code: int) -> "DeviceState":
        return {
            10: cls.UNMANAGED,
            20: cls.UNAVAILABLE,
            30: cls.DISCONNECTED,
            40: cls.PREPARE,
            50: cls.CONFIG,
            60: cls.NEED_AUTH,
            70: cls.IP_CONFIG,
            80: cls.IP_CHECK,
            90: cls.SECONDARIES,
            100: cls.ACTIVATED,
            110: cls.DEACTIVATING,
            120: cls.FAILED,
        }.get(code, cls.UNKNOWN)


@dataclass
class AccessPoint:
    """A visible wireless network."""

    ssid: str
    strength: int
    state: DeviceState = DeviceState.UNKNOWN
    public: bool = True
    working: bool = False
    path: str = "/"
    device_path: str = "/"


@dataclass(frozen=True)
class Vpn:
    """A configured VPN connection."""

    name: str
    path: str


@dataclass
class WiredConnection:
    name: str
    speed: int


@dataclass
class WiFiConnection:
    id: str
    name: str
    strength: int


@dataclass
class VpnConnection:
    name: str
    object_path: str


ActiveConnectionInfo = Union[WiredConnection, WiFiConnection, VpnConnection]
KnownConnection = Union[AccessPoint, Vpn]

# (object path, ssid, strength, flags)
ScannedAccessPoint = Tuple[str, Union[bytes, str], int, Optional[int]]


def _active_rank(info: ActiveConnectionInfo) -> int:
    if isinstance(info, VpnConnection):
        return 0
    if isinstance(info, WiredConnection):
        return 1
    if isinstance(info, WiFiConnection):
        return 2
    raise TypeError(f"unknown active connection: {info!r}")


def sort_active_connections(
    infos: Iterable[ActiveConnectionInfo],
) -> list[ActiveConnectionInfo]:
    """Order active connections: VPNs, then wired, then Wi-Fi, each by name."""
    return sorted(infos, key=lambda info: (_active_rank(info), info.name))


def _as_text(value: Any) -> str:
    return value if isinstance(value, str) else ""


def connection_id(settings: Settings) -> Optional[str]:
    """The ``connection.id`` of a settings map; ``""`` if it is not a string."""
    section = settings.get(CONNECTION_SECTION)
    if section is None or "id" not in section:
        return None
    return _as_text(section["id"])


def known_connections(
    access_points: Sequence[AccessPoint],
    connection_settings: Iterable[Tuple[str, Settings]],
) -> list[KnownConnection]:
    """Access points with a saved profile, followed by every saved VPN."""
    known_ssids: list[str] = []
    known_vpns: list[Vpn] = []
    for path, settings in connection_settings:
        if WIRELESS_SECTION in settings:
            ssid = connection_id(settings)
            if ssid is not None:
                known_ssids.append(ssid)
        elif VPN_SECTION in settings:
            name = connection_id(settings)
            if name is not None:
                known_vpns.append(Vpn(name=name, path=path))

    result: list[KnownConnection] = [
        ap for ap in access_points if ap.ssid in known_ssids
    ]
    result.extend(known_vpns)
    return result


def find_connection(
    connection_settings: Iterable[Tuple[str, Settings]], name: str
) -> Optional[str]:
    """Path of the first saved connection whose id is ``name``.

    Raises KeyError when a profile lacks ``connection.id``.
    """
    for path, settings in connection_settings:
        section = settings.get(CONNECTION_SECTION)
        if section is None or "id" not in section:
            raise KeyError(f"connection {path} has no id")
        if _as_text(section["id"]) == name:
            return path
    return None


def _decode_ssid(ssid: Union[bytes, str]) -> str:
    if isinstance(ssid, str):
        return ssid
    return bytes(ssid).decode("utf-8", errors="replace")


def dedupe_access_points(
    scanned: Iterable[ScannedAccessPoint],
    state: DeviceState,
    device_path: str,
) -> list[AccessPoint]:
    """Keep the strongest access point per SSID, strongest first."""
    by_ssid: dict[str, AccessPoint] = {}
    for path, raw_ssid, strength, flags in scanned:
        ssid = _decode_ssid(raw_ssid)
        existing = by_ssid.get(ssid)
        if existing is not None and existing.strength > strength:
            continue
        by_ssid[ssid] = AccessPoint(
            ssid=ssid,
            strength=strength,
            state=state,
            public=(flags or 0) == 0,
            working=False,
            path=path,
            device_path=device_path,
        )
    return sorted(by_ssid.values(), key=lambda ap: ap.strength, reverse=True)


def merge_access_points(groups: Iterable[Iterable[AccessPoint]]) -> list[AccessPoint]:
    """Join per-device access point lists, strongest first."""
    merged = [ap for group in groups for ap in group]
    return sorted(merged, key=lambda ap: ap.strength, reverse=True)


def new_wifi_connection_settings(
    ssid: str, password: Optional[str]
) -> dict[str, dict[str, Any]]:
    """Settings for a new Wi-Fi profile, secured with WPA-PSK if a password is given."""
    settings: dict[str, dict[str, Any]] = {
        WIRELESS_SECTION: {"ssid": ssid.encode("utf-8")},
        CONNECTION_SECTION: {"id": ssid, "type": WIRELESS_SECTION},
    }
    if password is not None:
        settings[WIRELESS_SECURITY_SECTION] = {"psk": password, "key-mgmt": "wpa-psk"}
    return settings


def update_psk(settings: Settings, password: str) -> dict[str, dict[str, Any]]:
    """Copy of ``settings`` with the pre-shared key replaced, if it has a security section."""
    updated = {section: dict(values) for section, values in settings.items()}
    security = updated.get(WIRELESS_SECURITY_SECTION)
    if security is not None:
        security["psk"] = password
    return updated