"""Publish request models and loaders.

A request can be built from any mapping (for example parsed JSON or keyword
arguments) with :func:`from_mapping`, or read from a TOML file with
:func:`load_config`.

Usage
-----
Load a request from a TOML file::

    from pathlib import Path
    from maven_publish.config import load_config

    config = load_config(Path("publish.toml"))
    print(config.coordinate)

A minimal file looks like this::

    group_id = "com.example"
    artifact_id = "widget"
    version = "1.0.0"
    url = "https://repo.example.com/releases"

    [[artifacts]]
    path = "build/widget.jar"
    packaging = "jar"
"""

from __future__ import annotations

import dataclasses
import typing as typ
from collections.abc import Mapping
from pathlib import Path

import tomllib

from .errors import ConfigurationError
from .layout import ArtifactSpec, Coordinate
from .transport import DEFAULT_NOPROXY

__all__ = [
    "DEFAULT_STAGING_DIR",
    "AuthConfig",
    "PublishConfig",
    "coerce_bool",
    "from_mapping",
    "load_config",
]

DEFAULT_STAGING_DIR = Path("test/poms")

_ALIASES = {
    "groupId": "group_id",
    "artifactId": "artifact_id",
    "pomDir": "staging_dir",
    "stagingDir": "staging_dir",
}
_REQUIRED_KEYS = {"group_id", "artifact_id", "version", "url"}


@dataclasses.dataclass(slots=True, frozen=True)
class AuthConfig:
    """Credentials handed to the transport."""

    username: str
    password: str


@dataclasses.dataclass(slots=True)
class PublishConfig:
    """Everything needed to publish one coordinate.

    Parameters
    ----------
    group_id : str
        Dot separated group, for example ``"com.example"``.
    artifact_id : str
        Artifact name within the group.
    version : str
        Version string; a ``SNAPSHOT`` suffix also publishes version metadata.
    url : str
        Base repository URL. Remote paths are appended after a ``/``.
    artifacts : list[ArtifactSpec]
        Payloads to publish.
    staging_dir : Path, default=Path("test/poms")
        Directory receiving generated descriptors and digest sidecars.
    parallel : bool, default=False
        Upload every file at once instead of one at a time.
    quiet : bool, default=False
        Suppress progress output.
    auth : AuthConfig | None, optional
        Repository credentials.
    insecure : bool, default=False
        Skip TLS certificate verification.
    noproxy : str, default="127.0.0.1"
        Hosts that bypass the proxy.
    cwd : Path | None, optional
        Working directory for the transport process.
    """

    group_id: str
    artifact_id: str
    version: str
    url: str
    artifacts: list[ArtifactSpec]
    staging_dir: Path = DEFAULT_STAGING_DIR
    parallel: bool = False
    quiet: bool = False
    auth: AuthConfig | None = None
    insecure: bool = False
    noproxy: str = DEFAULT_NOPROXY
    cwd: Path | None = None

    @property
    def coordinate(self) -> Coordinate:
        """Coordinate described by this request."""
        return Coordinate(self.group_id, self.artifact_id, self.version)


def coerce_bool(value: object, key: str) -> bool:
    """Return ``value`` as a strict boolean.

    Examples
    --------
    >>> coerce_bool(" Yes ", "parallel"), coerce_bool("off", "quiet")
    (True, False)
    """

    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        normalised = value.strip().lower()
        if normalised in {"", "false", "0", "no", "off"}:
            return False
        if normalised in {"true", "1", "yes", "on"}:
            return True
    message = f"Cannot interpret {value!r} as a boolean for '{key}'"
    raise ConfigurationError(message)


def load_config(config_file: Path) -> PublishConfig:
    """Load a publish request from the TOML file ``config_file``.

    Relative ``staging_dir``, ``cwd`` and artifact paths given in the file
    resolve against the directory containing ``config_file``. When the file
    omits ``staging_dir`` the default stays relative to the caller.

    Raises
    ------
    FileNotFoundError
        Raised when ``config_file`` does not exist.
    ConfigurationError
        Raised when the file is not valid TOML or lacks required keys.
    """

    config_file = Path(config_file)
    if not config_file.is_file():
        message = f"Configuration file not found at {config_file}"
        raise FileNotFoundError(message)

    try:
        with config_file.open("rb") as handle:
            data = tomllib.load(handle)
    except tomllib.TOMLDecodeError as exc:
        message = f"Invalid TOML in {config_file}: {exc}"
        raise ConfigurationError(message) from exc
    return from_mapping(data, base_dir=config_file.parent)


def from_mapping(
    data: Mapping[str, typ.Any], *, base_dir: Path | None = None
) -> PublishConfig:
    """Build a :class:`PublishConfig` from ``data``.

    camelCase keys used by older configurations (``groupId``, ``artifactId``,
    ``pomDir``, ``stagingDir``) are accepted. The single-artifact shorthand
    (``artifact`` with ``packaging`` and ``classifier``) is appended after any
    ``artifacts`` entries.

    Raises
    ------
    ConfigurationError
        Raised when required fields are absent or malformed.
    """

    if not isinstance(data, Mapping):
        message = "Publish options must be a mapping of keys to values"
        raise ConfigurationError(message)
    options = {_ALIASES.get(key, key): value for key, value in data.items()}
    _require_keys(options)

    return PublishConfig(
        group_id=str(options["group_id"]),
        artifact_id=str(options["artifact_id"]),
        version=str(options["version"]),
        url=str(options["url"]),
        artifacts=_make_artifacts(options, base_dir),
        staging_dir=(
            _resolve_path(staging_dir, base_dir)
            if (staging_dir := options.get("staging_dir"))
            else DEFAULT_STAGING_DIR
        ),
        parallel=coerce_bool(options.get("parallel", False), "parallel"),
        quiet=coerce_bool(options.get("quiet", False), "quiet"),
        auth=_make_auth(options.get("auth")),
        insecure=coerce_bool(options.get("insecure", False), "insecure"),
        noproxy=str(options.get("noproxy") or DEFAULT_NOPROXY),
        cwd=_resolve_path(cwd, base_dir) if (cwd := options.get("cwd")) else None,
    )


def _require_keys(options: Mapping[str, typ.Any]) -> None:
    if missing := sorted(key for key in _REQUIRED_KEYS if not options.get(key)):
        joined = ", ".join(missing)
        message = f"Missing required publish option(s): {joined}"
        raise ConfigurationError(message)


def _resolve_path(value: str | Path, base_dir: Path | None) -> Path:
    path = Path(value)
    if base_dir is None or path.is_absolute():
        return path
    return base_dir / path


def _make_auth(value: object) -> AuthConfig | None:
    if value is None:
        return None
    if not isinstance(value, Mapping):
        message = "'auth' must be a table with 'username' and 'password'"
        raise ConfigurationError(message)
    if missing := sorted(key for key in ("username", "password") if key not in value):
        joined = ", ".join(missing)
        message = f"Missing required key(s) {joined} in 'auth'"
        raise ConfigurationError(message)
    return AuthConfig(username=str(value["username"]), password=str(value["password"]))


def _make_artifact(
    entry: Mapping[str, typ.Any], label: str, base_dir: Path | None
) -> ArtifactSpec:
    path = entry.get("path") or entry.get("artifact")
    if not path:
        message = f"Missing artifact path in {label}"
        raise ConfigurationError(message)
    packaging = entry.get("packaging")
    if not isinstance(packaging, str) or not packaging:
        message = f"Missing artifact packaging in {label}"
        raise ConfigurationError(message)
    classifier = entry.get("classifier")
    return ArtifactSpec(
        path=_resolve_path(path, base_dir),
        packaging=packaging,
        classifier=str(classifier) if classifier else None,
    )


def _make_artifacts(
    options: Mapping[str, typ.Any], base_dir: Path | None
) -> list[ArtifactSpec]:
    entries = options.get("artifacts") or []
    if not isinstance(entries, list):
        message = "'artifacts' must be a list of tables"
        raise ConfigurationError(message)

    artifacts: list[ArtifactSpec] = []
    for index, entry in enumerate(entries, start=1):
        if not isinstance(entry, Mapping):
            message = (
                "Artifact entries must be tables of key/value pairs "
                f"(entry #{index})"
            )
            raise ConfigurationError(message)
        artifacts.append(_make_artifact(entry, f"artifact entry #{index}", base_dir))

    if shorthand := options.get("artifact"):
        artifacts.append(
            _make_artifact(
                {
                    "path": shorthand,
                    "packaging": options.get("packaging"),
                    "classifier": options.get("classifier"),
                },
                "the 'artifact' option",
                base_dir,
            )
        )

    if not artifacts:
        message = "No artifacts configured to publish"
        raise ConfigurationError(message)
    return artifacts
