"""Shared fixtures: canned tailscaled responses and a fake client."""

import copy

import pytest

from tsinfo.core.config import PluginConfig
from tsinfo.core.info import Info
from tsinfo.core.translate import Translator

STATUS = {
    "Version": "1.78.1-t1234",
    "BackendState": "Running",
    "AuthURL": "",
    "TailscaleIPs": ["100.64.0.1", "fd7a:115c:a1e0::1"],
    "MagicDNSSuffix": "example.ts.net",
    "Health": ["dns: could not reach resolver", "tailscaled update available"],
    "CurrentTailnet": {"Name": "example.com", "MagicDNSSuffix": "example.ts.net", "MagicDNSEnabled": True},
    "Self": {
        "ID": "nSelf",
        "PublicKey": "nodekey:self",
        "HostName": "tower",
        "DNSName": "tower.example.ts.net.",
        "OS": "linux",
        "UserID": 1,
        "TailscaleIPs": ["100.64.0.1", "fd7a:115c:a1e0::1"],
        "AllowedIPs": ["100.64.0.1/32", "192.168.1.0/24"],
        "Tags": ["tag:server", "tag:nas"],
        "Online": True,
        "InNetworkMap": True,
        "ExitNodeOption": False,
        "KeyExpiry": "2025-07-01T00:00:00Z",
        "CapMap": {
            "https://tailscale.com/cap/https": None,
            "https://tailscale.com/cap/funnel-ports?ports=443,8443,10000": None,
        },
    },
    "Peer": {
        "nodekey:laptop": {
            "ID": "nLaptop",
            "DNSName": "laptop.example.ts.net.",
            "UserID": 1,
            "TailscaleIPs": ["100.64.0.2"],
            "Online": True,
            "Active": True,
            "Relay": "fra",
            "CurAddr": "",
            "TxBytes": 1024,
            "RxBytes": 2048,
        },
        "nodekey:phone": {
            "ID": "nPhone",
            "DNSName": "phone.example.ts.net.",
            "UserID": 2,
            "TailscaleIPs": ["100.64.0.3"],
            "Online": True,
            "Active": True,
            "Relay": "fra",
            "CurAddr": "203.0.113.5:41641",
            "ShareeNode": True,
        },
        "nodekey:mullvad": {
            "ID": "nMullvad",
            "DNSName": "se-sto-wg-001.mullvad.ts.net.",
            "UserID": 3,
            "TailscaleIPs": ["100.64.0.4"],
            "Tags": ["tag:mullvad-exit-node"],
            "ExitNodeOption": True,
            "Online": True,
            "Active": False,
            "Location": {"Country": "Sweden", "CountryCode": "SE", "City": "Stockholm", "CityCode": "STO"},
        },
        "nodekey:gateway": {
            "ID": "nGateway",
            "DNSName": "gateway.example.ts.net.",
            "UserID": 1,
            "TailscaleIPs": ["100.64.0.5"],
            "ExitNodeOption": True,
            "ExitNode": True,
            "Online": False,
            "Active": True,
        },
    },
    "User": {
        "1": {"ID": 1, "LoginName": "alice@example.com", "DisplayName": "Alice"},
        "2": {"ID": 2, "LoginName": "bob@example.org", "DisplayName": "Bob"},
        "3": {"ID": 3, "LoginName": "mullvad@tailscale", "DisplayName": "Mullvad"},
    },
}

PREFS = {
    "RouteAll": True,
    "CorpDNS": False,
    "RunSSH": True,
    "ExitNodeID": "nGateway",
    "ExitNodeIP": "",
    "ExitNodeAllowLANAccess": False,
    "AdvertiseRoutes": ["192.168.1.0/24", "0.0.0.0/0", "10.0.0.0/8", "::/0"],
    "LoggedOut": False,
    "Hostname": "tower",
}

LOCK = {
    "Enabled": True,
    "NodeKey": "nodekey:self",
    "NodeKeySigned": True,
    "PublicKey": "tlpub:self",
    "TrustedKeys": [{"Key": "tlpub:other", "Votes": 1}, {"Key": "tlpub:self", "Votes": 1}],
    "FilteredPeers": [
        {"Name": "newbox", "ID": 7, "StableID": "nNew", "NodeKey": "nodekey:new1", "TailscaleIPs": ["100.64.0.9"]},
        {"Name": "printer", "ID": 8, "StableID": "nPrn", "NodeKey": "nodekey:prn", "TailscaleIPs": []},
    ],
}

SERVE = {"AllowFunnel": {"tower.example.ts.net:443": True}}


class FakeLocalAPI:
    """Stands in for LocalAPI, serving canned responses."""

    def __init__(self, status=None, prefs=None, lock=None, serve=None) -> None:
        self.status = copy.deepcopy(STATUS) if status is None else status
        self.prefs = copy.deepcopy(PREFS) if prefs is None else prefs
        self.lock = copy.deepcopy(LOCK) if lock is None else lock
        self.serve = copy.deepcopy(SERVE) if serve is None else serve
        self.calls: list[str] = []
        self.closed = False

    def __enter__(self):
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        self.closed = True

    def get_status(self) -> dict:
        self.calls.append("status")
        return self.status

    def get_prefs(self) -> dict:
        self.calls.append("prefs")
        return self.prefs

    def get_tka_status(self) -> dict:
        self.calls.append("tka")
        return self.lock

    def get_serve_config(self) -> dict:
        self.calls.append("serve")
        return self.serve


@pytest.fixture
def fake_client():
    return FakeLocalAPI()


@pytest.fixture
def make_info():
    """Build an Info from canned data, with optional overrides.

    The default translator echoes keys, so "yes" renders as "yes".
    """

    def _make(status=None, prefs=None, lock=None, serve=None, config=None, messages=None) -> Info:
        client = FakeLocalAPI(status=status, prefs=prefs, lock=lock, serve=serve)
        return Info(Translator(messages), client, config or PluginConfig())

    return _make


@pytest.fixture
def status_data():
    return copy.deepcopy(STATUS)


@pytest.fixture
def prefs_data():
    return copy.deepcopy(PREFS)


@pytest.fixture
def lock_data():
    return copy.deepcopy(LOCK)
