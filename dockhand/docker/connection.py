"""Docker daemon connection: address and TLS material applied as global CLI flags."""

from __future__ import annotations

from dataclasses import dataclass

from dockhand.config.schema import DEFAULT_DOCKER_HOST, DockerConfig


@dataclass(frozen=True)
class TLSMaterial:
    """TLS verification flag and certificate paths."""

    verify: bool = False
    ca_cert: str | None = None
    cert: str | None = None
    key: str | None = None


@dataclass(frozen=True)
class DockerConnection:
    """
    Immutable connection settings shared by every tool and sandbox provider.

    Passed explicitly into constructors; never looked up from global state.
    """

    host: str = DEFAULT_DOCKER_HOST
    tls: TLSMaterial | None = None
    timeout_wrapper: bool = True
    max_buffer_bytes: int = 5 * 1024 * 1024

    @classmethod
    def from_config(cls, config: DockerConfig) -> "DockerConnection":
        tls = None
        if config.tls is not None:
            tls = TLSMaterial(
                verify=config.tls.verify,
                ca_cert=config.tls.ca_cert or None,
                cert=config.tls.cert or None,
                key=config.tls.key or None,
            )
        return cls(
            host=(config.host or "").strip() or DEFAULT_DOCKER_HOST,
            tls=tls,
            timeout_wrapper=config.timeout_wrapper,
            max_buffer_bytes=config.max_buffer_bytes,
        )

    @property
    def uses_default_host(self) -> bool:
        return self.host == DEFAULT_DOCKER_HOST

    def global_args(self) -> list[str]:
        """Flags placed between `docker` and the subcommand."""
        args: list[str] = []
        if not self.uses_default_host:
            args.extend(["-H", self.host])
        if self.tls is not None and self.tls.verify:
            args.append("--tls")
            if self.tls.ca_cert:
                args.append(f"--tlscacert={self.tls.ca_cert}")
            if self.tls.cert:
                args.append(f"--tlscert={self.tls.cert}")
            if self.tls.key:
                args.append(f"--tlskey={self.tls.key}")
        return args
