"""Battery and power-profile state and the events that change it."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timedelta
from enum import Enum
from typing import Optional, Union

from barstate.utils import IndicatorState

BATTERY_DEVICE_TYPE = 2

_STATE_CHARGING = 1
_STATE_DISCHARGING = 2
_STATE_FULL = 4

_LOW_BATTERY = 20


@dataclass(frozen=True)
class Charging:
    """Battery is charging; ``time_to_full`` is the estimate to a full charge."""

    time_to_full: timedelta = field(default_factory=timedelta)


@dataclass(frozen=True)
class Discharging:
    """Battery is draining; ``time_to_empty`` is the estimate until it is empty."""

    time_to_empty: timedelta = field(default_factory=timedelta)


@dataclass(frozen=True)
class Full:
    """Battery is fully charged."""


BatteryStatus = Union[Charging, Discharging, Full]


class BatteryIcon(Enum):
    """Icon shown for the battery level."""

    CHARGING = "battery_charging"
    BATTERY_0 = "battery_0"
    BATTERY_1 = "battery_1"
    BATTERY_2 = "battery_2"
    BATTERY_3 = "battery_3"
    BATTERY_4 = "battery_4"


@dataclass(frozen=True)
class BatteryData:
    """Charge level in percent and what the battery is doing."""

    capacity: int
    status: BatteryStatus

    def indicator_state(self) -> IndicatorState:
        if isinstance(self.status, Charging):
            return IndicatorState.SUCCESS
        if isinstance(self.status, Discharging) and self.capacity < _LOW_BATTERY:
            return IndicatorState.DANGER
        return IndicatorState.NORMAL

    def icon(self) -> BatteryIcon:
        if isinstance(self.status, Charging):
            return BatteryIcon.CHARGING
        if isinstance(self.status, Discharging):
            for limit, icon in (
                (20, BatteryIcon.BATTERY_0),
                (40, BatteryIcon.BATTERY_1),
                (60, BatteryIcon.BATTERY_2),
                (80, BatteryIcon.BATTERY_3),
            ):
                if self.capacity < limit:
                    return icon
        return BatteryIcon.BATTERY_4


class PowerProfile(Enum):
    """Active power profile; the values are the daemon's profile names."""

    BALANCED = "balanced"
    PERFORMANCE = "performance"
    POWER_SAVER = "power-saver"
    UNKNOWN = "unknown"

    @classmethod
    def from_name(cls, name: Optional[str]) -> "PowerProfile":
        """Profile for a daemon profile name; anything unrecognised is UNKNOWN."""
        for profile in (cls.BALANCED, cls.PERFORMANCE, cls.POWER_SAVER):
            if profile.value == name:
                return profile
        return cls.UNKNOWN

    def toggled(self) -> "PowerProfile":
        """Next profile in the cycle balanced, performance, power-saver."""
        return {
            PowerProfile.BALANCED: PowerProfile.PERFORMANCE,
            PowerProfile.PERFORMANCE: PowerProfile.POWER_SAVER,
            PowerProfile.POWER_SAVER: PowerProfile.BALANCED,
        }.get(self, PowerProfile.UNKNOWN)


def _seconds(value: Optional[int]) -> timedelta:
    return timedelta(seconds=max(int(value or 0), 0))


def battery_status(
    state: int,
    time_to_full: Optional[int] = None,
    time_to_empty: Optional[int] = None,
) -> BatteryStatus:
    """Status for a numeric device state; unknown states count as discharging."""
    if state == _STATE_CHARGING:
        return Charging(_seconds(time_to_full))
    if state == _STATE_DISCHARGING:
        return Discharging(_seconds(time_to_empty))
    if state == _STATE_FULL:
        return Full()
    return Discharging(timedelta())


def battery_data(
    state: int,
    percentage: Optional[float],
    time_to_full: Optional[int] = None,
    time_to_empty: Optional[int] = None,
) -> BatteryData:
    """Battery data from raw device properties; the percentage is truncated."""
    return BatteryData(
        capacity=int(percentage or 0),
        status=battery_status(state, time_to_full, time_to_empty),
    )


def is_battery_device(device_type: int, power_supply: bool) -> bool:
    """Whether a power device is the system's battery."""
    return device_type == BATTERY_DEVICE_TYPE and bool(power_supply)


@dataclass(frozen=True)
class UpdateBattery:
    data: BatteryData


@dataclass(frozen=True)
class NoBattery:
    pass


@dataclass(frozen=True)
class UpdatePowerProfile:
    profile: PowerProfile


UPowerEvent = Union[UpdateBattery, NoBattery, UpdatePowerProfile]


@dataclass
class UPowerState:
    """Battery, if any, and the active power profile."""

    battery: Optional[BatteryData] = None
    power_profile: PowerProfile = PowerProfile.UNKNOWN

    def update(self, event: UPowerEvent) -> None:
        """Apply a power event to this state."""
        if isinstance(event, UpdateBattery):
            self.battery = event.data
        elif isinstance(event, NoBattery):
            self.battery = None
        elif isinstance(event, UpdatePowerProfile):
            self.power_profile = event.profile
        else:
            raise TypeError(f"unknown power event: {event!r}")