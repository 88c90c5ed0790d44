"""Classify raw ``Key Value`` config lines into typed entries.

Recognized keywords come from ssh_config(5). Anything else is kept as an
:class:`UnknownKey` carrying the key exactly as written, so strict mode can
report it and the builder can otherwise drop it.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Tuple, Union

from .errors import UnparseableLineError


class EntryKey(Enum):
    HOST = "Host"
    MATCH = "Match"
    INCLUDE = "Include"
    ADD_KEYS_TO_AGENT = "AddKeysToAgent"
    ADDRESS_FAMILY = "AddressFamily"
    BATCH_MODE = "BatchMode"
    BIND_ADDRESS = "BindAddress"
    BIND_INTERFACE = "BindInterface"
    CANONICAL_DOMAINS = "CanonicalDomains"
    CANONICALIZE_FALLBACK_LOCAL = "CanonicalizeFallbackLocal"
    CANONICALIZE_HOSTNAME = "CanonicalizeHostname"
    CANONICALIZE_MAX_DOTS = "CanonicalizeMaxDots"
    CANONICALIZE_PERMITTED_CNAMES = "CanonicalizePermittedCNAMEs"
    CA_SIGNATURE_ALGORITHMS = "CASignatureAlgorithms"
    CERTIFICATE_FILE = "CertificateFile"
    CHANNEL_TIMEOUT = "ChannelTimeout"
    CHECK_HOST_IP = "CheckHostIP"
    CIPHERS = "Ciphers"
    CLEAR_ALL_FORWARDINGS = "ClearAllForwardings"
    COMPRESSION = "Compression"
    CONNECTION_ATTEMPTS = "ConnectionAttempts"
    CONNECT_TIMEOUT = "ConnectTimeout"
    CONTROL_MASTER = "ControlMaster"
    CONTROL_PATH = "ControlPath"
    CONTROL_PERSIST = "ControlPersist"
    DYNAMIC_FORWARD = "DynamicForward"
    ENABLE_ESCAPE_COMMAND_LINE = "EnableEscapeCommandline"
    ENABLE_SSH_KEYSIGN = "EnableSSHKeysign"
    ESCAPE_CHAR = "EscapeChar"
    EXIT_ON_FORWARD_FAILURE = "ExitOnForwardFailure"
    FINGERPRINT_HASH = "FingerprintHash"
    FORK_AFTER_AUTHENTICATION = "ForkAfterAuthentication"
    FORWARD_AGENT = "ForwardAgent"
    FORWARD_X11 = "ForwardX11"
    FORWARD_X11_TIMEOUT = "ForwardX11Timeout"
    FORWARD_X11_TRUSTED = "ForwardX11Trusted"
    GATEWAY_PORTS = "GatewayPorts"
    GLOBAL_KNOWN_HOSTS_FILE = "GlobalKnownHostsFile"
    GSSAPI_AUTHENTICATION = "GSSAPIAuthentication"
    GSSAPI_DELEGATE_CREDENTIALS = "GSSAPIDelegateCredentials"
    HASH_KNOWN_HOSTS = "HashKnownHosts"
    HOSTBASED_ACCEPTED_ALGORITHMS = "HostbasedAcceptedAlgorithms"
    HOSTBASED_AUTHENTICATION = "HostbasedAuthentication"
    HOST_KEY_ALGORITHMS = "HostKeyAlgorithms"
    HOST_KEY_ALIAS = "HostKeyAlias"
    HOSTNAME = "Hostname"
    IDENTITIES_ONLY = "IdentitiesOnly"
    IDENTITY_AGENT = "IdentityAgent"
    IDENTITY_FILE = "IdentityFile"
    IGNORE_UNKNOWN = "IgnoreUnknown"
    IP_QOS = "IPQoS"
    KBD_INTERACTIVE_AUTHENTICATION = "KbdInteractiveAuthentication"
    KBD_INTERACTIVE_DEVICES = "KbdInteractiveDevices"
    KEX_ALGORITHMS = "KexAlgorithms"
    KNOWN_HOSTS_COMMAND = "KnownHostsCommand"
    LOCAL_COMMAND = "LocalCommand"
    LOCAL_FORWARD = "LocalForward"
    LOG_LEVEL = "LogLevel"
    LOG_VERBOSE = "LogVerbose"
    MACS = "MACs"
    NO_HOST_AUTHENTICATION_FOR_LOCALHOST = "NoHostAuthenticationForLocalhost"
    NUMBER_OF_PASSWORD_PROMPTS = "NumberOfPasswordPrompts"
    OBSCURE_KEYSTROKE_TIMING = "ObscureKeystrokeTiming"
    PASSWORD_AUTHENTICATION = "PasswordAuthentication"
    PERMIT_LOCAL_COMMAND = "PermitLocalCommand"
    PERMIT_REMOTE_OPEN = "PermitRemoteOpen"
    PKCS11_PROVIDER = "PKCS11Provider"
    PORT = "Port"
    PREFERRED_AUTHENTICATIONS = "PreferredAuthentications"
    PROXY_COMMAND = "ProxyCommand"
    PROXY_JUMP = "ProxyJump"
    PROXY_USE_FDPASS = "ProxyUseFdpass"
    PUBKEY_ACCEPTED_ALGORITHMS = "PubkeyAcceptedAlgorithms"
    PUBKEY_AUTHENTICATION = "PubkeyAuthentication"
    REKEY_LIMIT = "RekeyLimit"
    REMOTE_COMMAND = "RemoteCommand"
    REMOTE_FORWARD = "RemoteForward"
    REQUEST_TTY = "RequestTTY"
    REQUIRED_RSA_SIZE = "RequiredRSASize"
    REVOKED_HOST_KEYS = "RevokedHostKeys"
    SECURITY_KEY_PROVIDER = "SecurityKeyProvider"
    SEND_ENV = "SendEnv"
    SERVER_ALIVE_COUNT_MAX = "ServerAliveCountMax"
    SERVER_ALIVE_INTERVAL = "ServerAliveInterval"
    SESSION_TYPE = "SessionType"
    SET_ENV = "SetEnv"
    STDIN_NULL = "StdinNull"
    STREAM_LOCAL_BIND_MASK = "StreamLocalBindMask"
    STREAM_LOCAL_BIND_UNLINK = "StreamLocalBindUnlink"
    STRICT_HOST_KEY_CHECKING = "StrictHostKeyChecking"
    SYSLOG_FACILITY = "SyslogFacility"
    TAG = "Tag"
    TCP_KEEP_ALIVE = "TCPKeepAlive"
    TUNNEL = "Tunnel"
    TUNNEL_DEVICE = "TunnelDevice"
    UPDATE_HOST_KEYS = "UpdateHostKeys"
    USE_KEYCHAIN = "UseKeychain"
    USER = "User"
    USER_KNOWN_HOSTS_FILE = "UserKnownHostsFile"
    VERIFY_HOST_KEY_DNS = "VerifyHostKeyDNS"
    VISUAL_HOST_KEY = "VisualHostKey"
    XAUTH_LOCATION = "XAuthLocation"

    @classmethod
    def lookup(cls, key: str) -> Optional["EntryKey"]:
        return _BY_LOWER.get(key.lower())

    def __str__(self) -> str:
        return self.value


_BY_LOWER: Dict[str, EntryKey] = {member.value.lower(): member for member in EntryKey}


@dataclass(frozen=True)
class UnknownKey:
    """A directive this parser does not know, kept verbatim."""

    raw: str

    def __str__(self) -> str:
        return self.raw


Key = Union[EntryKey, UnknownKey]

# key, then a run of whitespace and/or '=' (at most one '='), then the value
LINE_RE = re.compile(r"^(?P<key>[^\s=]+)(?:\s*=\s*|\s+)(?P<value>.*)$")


def classify_key(key: str) -> Key:
    member = EntryKey.lookup(key)
    if member is None:
        return UnknownKey(key)
    return member


def classify_line(line: str) -> Tuple[Key, str]:
    """Split ``line`` into a key and a value and classify the key.

    ``Key Value``, ``Key=Value`` and ``Key = Value`` are all accepted. Raises
    :class:`UnparseableLineError` when no separator is present.
    """
    m = LINE_RE.match(line.strip())
    if not m:
        raise UnparseableLineError(line)
    value = m.group("value").strip()
    if value.startswith("="):
        value = value[1:].lstrip()
    return classify_key(m.group("key")), value


__all__ = ["EntryKey", "UnknownKey", "Key", "classify_key", "classify_line"]
