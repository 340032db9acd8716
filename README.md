# barstate

State models and small helpers behind a desktop status bar. Each module keeps
the data for one bar service as plain Python objects and applies update events
to it, so a bar can redraw from that state.

The package has no third-party dependencies.

## Modules

- `barstate.utils`: the `IndicatorState` enum (`NORMAL`, `SUCCESS`,
  `WARNING`, `DANGER`), `format_duration`, which takes a `timedelta` or a
  number of seconds and returns text such as `1h  5m` or ` 7m`, and
  `truncate_text`, which shortens a label longer than `max_length` UTF-8 bytes
  to its head and tail joined by `...`.
- `barstate.launcher`: `execute_command`, `suspend`, `shutdown`, `reboot` and
  `logout`. Each starts its shell command with `bash -c`, waits for it on a
  background thread and returns the `subprocess.Popen` object. If the command
  cannot be started, `CommandError` is raised.
- `barstate.privacy`: `PrivacyData` tracks microphone, screen-share and webcam
  use. It is updated with `AddNode`, `RemoveNode`, `WebcamOpen` and
  `WebcamClose` events. `node_from_global` turns a media-graph global's
  properties into an `ApplicationNode`. `is_device_in_use` counts the file
  descriptors under `/proc` (or another root) that point at a device.
  `initial_privacy_data` builds the start-up state from that count.
- `barstate.nm_types`: NetworkManager code enums (`DeviceType`, `DeviceState`,
  `ConnectivityState`, `ActiveConnectionState`, each with `from_code`) and the
  `AccessPoint`, `Vpn`, `WiredConnection`, `WiFiConnection` and
  `VpnConnection` records. It also has helpers over connection-settings
  mappings:
  - `sort_active_connections`
  - `connection_id`
  - `known_connections`
  - `find_connection`
  - `dedupe_access_points`
  - `merge_access_points`
  - `new_wifi_connection_settings`
  - `update_psk`
- `barstate.network`: `NetworkData` and the events that update it
  (`WiFiEnabled`, `AirplaneMode`, `Connectivity`, `WirelessDevice`,
  `ActiveConnections`, `KnownConnections`, `WirelessAccessPoints`, `Strength`,
  `RequestPasswordForSsid`, `ScanningNearbyWifi`). `vpn_toggle_target` picks
  which path to activate or deactivate. There are also `connection_name`,
  `compute_airplane_mode` and `rfkill_command`.
- `barstate.tray`: `StatusNotifierWatcher` keeps track of registered items.
  Menus are parsed with `Layout.from_dbus` and `LayoutProps.from_dict`. Icons
  are handled by `Icon`, `argb_to_rgba` and `largest_icon`, and item names by
  `split_item_name`. `StatusNotifierItem` and `TrayData` are updated with
  `Registered`, `IconChanged`, `MenuLayoutChanged` and `Unregistered` events,
  or with `None`, which changes nothing.
- `barstate.upower`: `BatteryData` has `indicator_state` and `icon` methods;
  `icon` returns a `BatteryIcon`. Battery status is one of `Charging`,
  `Discharging` or `Full`, built by `battery_status` and `battery_data`.
  `PowerProfile` has `from_name` and `toggled`, which cycles balanced →
  performance → power-saver. `is_battery_device` tells whether a power device
  is the system battery. `UPowerState` is updated with `UpdateBattery`,
  `NoBattery` and `UpdatePowerProfile`.

## Examples

```python
from barstate.privacy import PrivacyData, AddNode, ApplicationNode, Media

data = PrivacyData()
data.update(AddNode(ApplicationNode(id=42, media=Media.AUDIO)))
assert data.microphone_access()
assert not data.no_access()
```

```python
from barstate.upower import PowerProfile, battery_data, BatteryIcon
from barstate.utils import IndicatorState

assert PowerProfile.from_name("balanced").toggled() is PowerProfile.PERFORMANCE

battery = battery_data(state=2, percentage=15.7, time_to_empty=3600)
assert battery.capacity == 15
assert battery.icon() is BatteryIcon.BATTERY_0
assert battery.indicator_state() is IndicatorState.DANGER
```

```python
from barstate.utils import format_duration, truncate_text

assert format_duration(3900) == "1h  5m"
assert truncate_text("abcdefghij", 4) == "ab...ij"
```

## What it does not do

The package only holds state and does the pure logic around it. It does not
connect to the system or session message bus. It does not query or watch
NetworkManager, UPower, power profiles, the media graph or the webcam device,
and it does not host a tray watcher on the bus. The caller gathers those
values and passes them in as events. There is no bar window, theming or
drawing, and no command-line program. Only the launcher functions start other
processes.

## Tests

```
pip install -e .[test]
pytest
```