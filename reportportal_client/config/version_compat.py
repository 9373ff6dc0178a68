"""
Version Compatibility Manager.

Brings client configuration files written for older schema versions up to
the current one, so existing agent configs keep working after key renames.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Tuple

from loguru import logger

# (config_data) -> config_data
MigrationFunc = Callable[[Dict[str, Any]], Dict[str, Any]]


class VersionCompatManager:
    """
    Applies registered migrations to configuration mappings.

    Migrations transform a config dict from one schema version to the next.
    A config with an older ``schema_version`` gets every applicable
    migration applied in version order.

    Example:
        manager = VersionCompatManager()

        @manager.register_migration("1.0.0", "1.1.0")
        def add_retries(config):
            config.setdefault("retries", 0)
            return config
    """

    CURRENT_VERSION = "1.0.0"

    def __init__(self) -> None:
        self._migrations: List[Tuple[str, str, MigrationFunc]] = []
        self._register_builtin_migrations()

    def register_migration(
        self, from_version: str, to_version: str
    ) -> Callable[[MigrationFunc], MigrationFunc]:
        """
        Decorator to register a migration function.

        Args:
            from_version: Source schema version (semver string).
            to_version: Target schema version (semver string).
        """

        def decorator(func: MigrationFunc) -> MigrationFunc:
            self._migrations.append((from_version, to_version, func))
            self._migrations.sort(key=lambda m: self._version_tuple(m[0]))
            logger.debug(f"Registered migration: {from_version} -> {to_version}")
            return func

        return decorator

    def migrate(self, config: Dict[str, Any]) -> Dict[str, Any]:
        """
        Apply all necessary migrations to bring a config to the current version.

        A config without ``schema_version`` is assumed current and gets the
        current version injected.
        """
        current_version = config.get("schema_version")

        if current_version is None:
            logger.debug("No schema_version found — assuming current version.")
            config["schema_version"] = self.CURRENT_VERSION
            return config

        if current_version == self.CURRENT_VERSION:
            return config

        logger.info(
            f"Migrating config from v{current_version} to v{self.CURRENT_VERSION}"
        )

        for from_ver, to_ver, migration_func in self._migrations:
            if self._applies(from_ver, to_ver, current_version):
                logger.debug(f"Applying migration: {from_ver} -> {to_ver}")
                try:
                    config = migration_func(config)
                except Exception as e:
                    logger.error(f"Migration {from_ver} -> {to_ver} failed: {e}")
                    raise
                config["schema_version"] = to_ver

        return config

    def _applies(self, from_ver: str, to_ver: str, current_version: str) -> bool:
        return (
            self._version_tuple(from_ver) >= self._version_tuple(current_version)
            and self._version_tuple(to_ver) <= self._version_tuple(self.CURRENT_VERSION)
        )

    def _register_builtin_migrations(self) -> None:
        """Register built-in migrations for known version transitions."""

        @self.register_migration("0.1.0", "1.0.0")
        def _migrate_0_1_to_1_0(config: Dict[str, Any]) -> Dict[str, Any]:
            """
            Migrate from schema v0.1.0 to v1.0.0.

            Changes:
            - Renamed 'uuid' to 'token'.
            - Renamed 'url' to 'endpoint'; a bare host URL gets "/api/v1" appended.
            """
            if "uuid" in config and "token" not in config:
                config["token"] = config.pop("uuid")
                logger.debug("Migrated uuid -> token")

            if "url" in config and "endpoint" not in config:
                url = str(config.pop("url")).rstrip("/")
                if not url.endswith("/api/v1"):
                    url = f"{url}/api/v1"
                config["endpoint"] = url
                logger.debug(f"Migrated url -> endpoint ({url})")

            return config

    @staticmethod
    def _version_tuple(version_str: str) -> Tuple[int, ...]:
        """Convert a semver string to a comparable tuple of ints."""
        try:
            return tuple(int(part) for part in version_str.split("."))
        except (ValueError, AttributeError):
            logger.warning(f"Invalid version string: {version_str}, treating as (0, 0, 0)")
            return (0, 0, 0)
