"""Network state and the events that change it."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

from barstate.nm_types import (
    AccessPoint,
    ActiveConnectionInfo,
    ConnectivityState,
    KnownConnection,
    Vpn,
    VpnConnection,
    WiFiConnection,
    WiredConnection,
)

RFKILL_PATH = "/usr/sbin/rfkill"


@dataclass(frozen=True)
class WiFiEnabled:
    enabled: bool


@dataclass(frozen=True)
class AirplaneMode:
    enabled: bool


@dataclass(frozen=True)
class Connectivity:
    state: ConnectivityState


@dataclass(frozen=True)
class WirelessDevice:
    wifi_present: bool
    wireless_access_points: list[AccessPoint] = field(default_factory=list)


@dataclass(frozen=True)
class ActiveConnections:
    connections: list[ActiveConnectionInfo] = field(default_factory=list)


@dataclass(frozen=True)
class KnownConnections:
    connections: list[KnownConnection] = field(default_factory=list)


@dataclass(frozen=True)
class WirelessAccessPoints:
    access_points: list[AccessPoint] = field(default_factory=list)


@dataclass(frozen=True)
class Strength:
    ssid: str
    strength: int


@dataclass(frozen=True)
class RequestPasswordForSsid:
    ssid: str


@dataclass(frozen=True)
class ScanningNearbyWifi:
    pass


NetworkEvent = Union[
    WiFiEnabled,
    AirplaneMode,
    Connectivity,
    WirelessDevice,
    ActiveConnections,
    KnownConnections,
    WirelessAccessPoints,
    Strength,
    RequestPasswordForSsid,
    ScanningNearbyWifi,
]


def connection_name(info: ActiveConnectionInfo) -> str:
    """Display name of an active connection."""
    if isinstance(info, (WiredConnection, WiFiConnection, VpnConnection)):
        return info.name
    raise TypeError(f"unknown active connection: {info!r}")


def compute_airplane_mode(bluetooth_soft_blocked: bool, wifi_enabled: bool) -> bool:
    """Airplane mode is on when bluetooth is soft-blocked and Wi-Fi is off."""
    return bluetooth_soft_blocked and not wifi_enabled


def rfkill_command(airplane_mode: bool) -> list[str]:
    """Command line that blocks or unblocks bluetooth for airplane mode."""
    return [RFKILL_PATH, "block" if airplane_mode else "unblock", "bluetooth"]


@dataclass
class NetworkData:
    """Everything the bar knows about the network."""

    wifi_present: bool = False
    wireless_access_points: list[AccessPoint] = field(default_factory=list)
    active_connections: list[ActiveConnectionInfo] = field(default_factory=list)
    known_connections: list[KnownConnection] = field(default_factory=list)
    wifi_enabled: bool = False
    airplane_mode: bool = False
    connectivity: ConnectivityState = ConnectivityState.UNKNOWN
    scanning_nearby_wifi: bool = False

    def update(self, event: NetworkEvent) -> None:
        """Apply a network event to this state."""
        if isinstance(event, AirplaneMode):
            self.airplane_mode = event.enabled
        elif isinstance(event, WiFiEnabled):
            self.wifi_enabled = event.enabled
        elif isinstance(event, ScanningNearbyWifi):
            self.scanning_nearby_wifi = True
        elif isinstance(event, WirelessDevice):
            self.wifi_present = event.wifi_present
            self.scanning_nearby_wifi = False
            self.wireless_access_points = list(event.wireless_access_points)
        elif isinstance(event, ActiveConnections):
            self.active_connections = list(event.connections)
        elif isinstance(event, KnownConnections):
            self.known_connections = list(event.connections)
        elif isinstance(event, Strength):
            self._update_strength(event.ssid, event.strength)
        elif isinstance(event, Connectivity):
            self.connectivity = event.state
        elif isinstance(event, WirelessAccessPoints):
            self.wireless_access_points = list(event.access_points)
        elif isinstance(event, RequestPasswordForSsid):
            pass
        else:
            raise TypeError(f"unknown network event: {event!r}")

    def _update_strength(self, ssid: str, strength: int) -> None:
        access_point = next(
            (ap for ap in self.wireless_access_points if ap.ssid == ssid), None
        )
        if access_point is None:
            return
        access_point.strength = strength
        active = next(
            (
                info
                for info in self.active_connections
                if connection_name(info) == access_point.ssid
            ),
            None,
        )
        if isinstance(active, WiFiConnection):
            active.strength = strength

    def vpn_toggle_target(self, vpn: Vpn) -> tuple[str, bool]:
        """Object path to act on and whether the VPN should become active."""
        for info in self.active_connections:
            if isinstance(info, VpnConnection) and info.name == vpn.name:
                return info.object_path, False
        return vpn.path, True