import pytest

from barstate.nm_types import (
    AccessPoint,
    ActiveConnectionState,
    ConnectivityState,
    DeviceState,
    DeviceType,
    Vpn,
    VpnConnection,
    WiFiConnection,
    WiredConnection,
    connection_id,
    dedupe_access_points,
    find_connection,
    known_connections,
    merge_access_points,
    new_wifi_connection_settings,
    sort_active_connections,
    update_psk,
)


@pytest.mark.parametrize(
    "code, expected",
    [
        (1, DeviceType.ETHERNET),
        (2, DeviceType.WIFI),
        (5, DeviceType.BLUETOOTH),
        (14, DeviceType.GENERIC),
        (16, DeviceType.TUN_TAP),
        (29, DeviceType.WIREGUARD),
        (3, DeviceType.OTHER),
        (32, DeviceType.OTHER),
        (0, DeviceType.UNKNOWN),
        (33, DeviceType.UNKNOWN),
    ],
)
def test_device_type_from_code(code, expected):
    assert DeviceType.from_code(code) is expected


@pytest.mark.parametrize(
    "code, expected",
    [
        (1, ActiveConnectionState.ACTIVATING),
        (2, ActiveConnectionState.ACTIVATED),
        (3, ActiveConnectionState.DEACTIVATING),
        (4, ActiveConnectionState.DEACTIVATED),
        (0, ActiveConnectionState.UNKNOWN),
    ],
)
def test_active_connection_state_from_code(code, expected):
    assert ActiveConnectionState.from_code(code) is expected


@pytest.mark.parametrize(
    "code, expected",
    [
        (1, ConnectivityState.NONE),
        (2, ConnectivityState.PORTAL),
        (3, ConnectivityState.LOSS),
        (4, ConnectivityState.FULL),
        (0, ConnectivityState.UNKNOWN),
    ],
)
def test_connectivity_state_from_code(code, expected):
    assert ConnectivityState.from_code(code) is expected


@pytest.mark.parametrize(
    "code, expected",
    [
        (10, DeviceState.UNMANAGED),
        (60, DeviceState.NEED_AUTH),
        (100, DeviceState.ACTIVATED),
        (120, DeviceState.FAILED),
        (15, DeviceState.UNKNOWN),
    ],
)
def test_device_state_from_code(code, expected):
    assert DeviceState.from_code(code) is expected


def test_sort_active_connections_groups_by_kind_then_name():
    wifi = WiFiConnection(id="home", name="alpha", strength=50)
    wired_b = WiredConnection(name="b-wire", speed=1000)
    wired_a = WiredConnection(name="a-wire", speed=100)
    vpn = VpnConnection(name="zeta", object_path="/vpn/1")
    result = sort_active_connections([wifi, wired_b, vpn, wired_a])
    assert result == [vpn, wired_a, wired_b, wifi]


def test_connection_id_variants():
    assert connection_id({"connection": {"id": "home"}}) == "home"
    assert connection_id({"connection": {"id": 7}}) == ""
    assert connection_id({"connection": {}}) is None
    assert connection_id({}) is None


def test_known_connections_filters_access_points_and_appends_vpns():
    home = AccessPoint(ssid="home", strength=70)
    cafe = AccessPoint(ssid="cafe", strength=40)
    profiles = [
        ("/s/1", {"802-11-wireless": {}, "connection": {"id": "home"}}),
        ("/s/2", {"vpn": {}, "connection": {"id": "work"}}),
        ("/s/3", {"ethernet": {}, "connection": {"id": "lan"}}),
    ]
    result = known_connections([home, cafe], profiles)
    assert result == [home, Vpn(name="work", path="/s/2")]


def test_find_connection_returns_matching_path():
    profiles = [
        ("/s/1", {"connection": {"id": "cafe"}}),
        ("/s/2", {"connection": {"id": "home"}}),
    ]
    assert find_connection(profiles, "home") == "/s/2"
    assert find_connection(profiles, "missing") is None


def test_find_connection_without_id_raises():
    with pytest.raises(KeyError):
        find_connection([("/s/1", {"connection": {}})], "home")


def test_dedupe_keeps_strongest_and_sorts():
    scanned = [
        ("/ap/1", b"home", 30, 0),
        ("/ap/2", b"home", 60, 1),
        ("/ap/3", b"cafe", 45, None),
        ("/ap/4", b"home", 50, 0),
    ]
    result = dedupe_access_points(scanned, DeviceState.ACTIVATED, "/dev/1")
    assert [(ap.ssid, ap.path) for ap in result] == [("home", "/ap/2"), ("cafe", "/ap/3")]
    assert result[0].public is False
    assert result[1].public is True
    assert all(ap.device_path == "/dev/1" for ap in result)
    assert all(ap.state is DeviceState.ACTIVATED for ap in result)
    assert all(ap.working is False for ap in result)


def test_dedupe_equal_strength_later_wins():
    scanned = [("/ap/1", b"home", 40, 0), ("/ap/2", b"home", 40, 0)]
    result = dedupe_access_points(scanned, DeviceState.UNKNOWN, "/dev/1")
    assert [ap.path for ap in result] == ["/ap/2"]


def test_dedupe_decodes_invalid_utf8_lossily():
    result = dedupe_access_points([("/ap/1", b"caf\xff", 10, 0)], DeviceState.UNKNOWN, "/d")
    assert result[0].ssid == "caf\ufffd"


def test_merge_access_points_sorted_descending():
    a = AccessPoint(ssid="a", strength=20)
    b = AccessPoint(ssid="b", strength=90)
    c = AccessPoint(ssid="c", strength=50)
    merged = merge_access_points([[a, c], [b]])
    assert merged == [b, c, a]
    strengths = [ap.strength for ap in merged]
    assert strengths == sorted(strengths, reverse=True)


def test_new_wifi_connection_settings_open_network():
    settings = new_wifi_connection_settings("home", None)
    assert settings == {
        "802-11-wireless": {"ssid": b"home"},
        "connection": {"id": "home", "type": "802-11-wireless"},
    }


def test_new_wifi_connection_settings_with_password():
    password = "password"
    settings = new_wifi_connection_settings("home", password)
    assert settings["802-11-wireless-security"] == {"psk": password, "key-mgmt": "wpa-psk"}
    assert connection_id(settings) == "home"


def test_update_psk_replaces_key_without_mutating_input():
    original = {
        "connection": {"id": "home"},
        "802-11-wireless-security": {"psk": "secret", "key-mgmt": "wpa-psk"},
    }
    updated = update_psk(original, "password")
    assert updated["802-11-wireless-security"]["psk"] == "password"
    assert updated["802-11-wireless-security"]["key-mgmt"] == "wpa-psk"
    assert original["802-11-wireless-security"]["psk"] == "secret"


def test_update_psk_without_security_section_is_unchanged():
    original = {"connection": {"id": "home"}}
    assert update_psk(original, "password") == original