"""OpenStack connector: server lifecycle on any OpenStack cloud.

Relies on ``openstacksdk``.  Every command authenticates afresh, resolves
the compute service for the fixed region, performs one compute call and
closes the session again:

1. authenticate (a failure here stops the command immediately)
2. resolve the compute service
3. run the operation and validate what came back

Failures at any phase are recorded in the error log and turned into a
``False`` / ``None`` result; nothing is raised to the host.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, TypeVar

from pydantic import ValidationError

from openstack_provisioning.connector.base import ConnectorState, ProvisioningConnector
from openstack_provisioning.exceptions import (
    ConnectorError,
    ImageNotFoundError,
    PreconditionError,
    ProviderOperationError,
)
from openstack_provisioning.observability.correlation import command_scope
from openstack_provisioning.outcome import Outcome
from openstack_provisioning.schemas import CreatedServer, PlanOption
from openstack_provisioning.session import SessionManager
from openstack_provisioning.settings import (
    COMPUTE_REGION,
    COMPUTE_SERVICE_TYPE,
    IMAGE_NAME_MATCH,
    ConnectorSettings,
)

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from openstack_provisioning.schemas import Credentials

logger = logging.getLogger(__name__)

T = TypeVar("T")


class OpenStackConnector(ProvisioningConnector):
    """Provisioning connector for OpenStack compute (Nova)."""

    def __init__(
        self,
        state: ConnectorState | None = None,
        settings: ConnectorSettings | None = None,
        sessions: SessionManager | None = None,
    ) -> None:
        super().__init__(state)
        self._sessions = sessions or SessionManager(settings)

    # ------------------------------------------------------------------
    # connect / test_connection
    # ------------------------------------------------------------------

    def connect(self, credentials: Credentials) -> bool:
        """Remember *credentials*; validation waits for the first command."""
        self.state.credentials = credentials
        return True

    def test_connection(self) -> bool:
        self.errors.clear()
        with command_scope("test_connection"):
            auth = self._sessions.authenticate(self.state.credentials)
            self._sessions.release()
            if not auth.ok:
                self._record(auth.error)
                return False
            logger.info("[openstack] Connection test succeeded")
            return True

    # ------------------------------------------------------------------
    # create
    # ------------------------------------------------------------------

    def create(self) -> bool:
        self.errors.clear()
        with command_scope("create"):
            flavor_id = self.state.product.flavor
            name = self.state.account.domain
            if not flavor_id or not name:
                missing = "flavor" if not flavor_id else "server name"
                return self._reject(
                    PreconditionError(
                        f"Cannot create a server without a {missing}",
                        operation="create",
                    ),
                )

            outcome = self._execute(lambda compute: self._create_server(compute, name, flavor_id))
            if not outcome.ok:
                return False

            created: CreatedServer = outcome.value  # type: ignore[assignment]
            self.state.veid = created.id
            self.state.account.password = created.admin_password
            logger.info(
                "[openstack] Server %s created (name=%s flavor=%s)",
                created.id,
                name,
                flavor_id,
            )
            return True

    def _create_server(self, compute: Any, name: str, flavor_id: str) -> Outcome[CreatedServer]:
        try:
            image = select_image(compute.images())
            if image is None:
                return Outcome.failure(
                    ImageNotFoundError(
                        f"No image matching {IMAGE_NAME_MATCH!r} is available",
                        pattern=IMAGE_NAME_MATCH,
                    ),
                )
            flavor = compute.get_flavor(flavor_id)
        except Exception as exc:
            return Outcome.failure(
                ProviderOperationError(
                    f"Unable to resolve image or flavor: {exc}",
                    operation="create",
                    details={"flavor": flavor_id},
                ),
            )

        try:
            server = compute.create_server(name=name, image_id=image.id, flavor_id=flavor.id)
        except Exception as exc:
            return Outcome.failure(
                ProviderOperationError(
                    f"Unable to create server {name!r}: {exc}",
                    operation="create",
                ),
            )

        server_id = getattr(server, "id", None)
        try:
            created = CreatedServer.model_validate(
                {"id": server_id, "admin_password": getattr(server, "admin_password", None)},
            )
        except ValidationError as exc:
            # The server may exist remotely; the host still sees a failure.
            logger.warning(
                "[openstack] Create response for %r unusable, server %s left in place",
                name,
                server_id or "<unknown>",
            )
            return Outcome.failure(
                ProviderOperationError(
                    f"Unexpected create response: {exc.error_count()} invalid field(s)",
                    operation="create",
                    details={"server_id": server_id},
                ),
            )
        return Outcome.success(created)

    # ------------------------------------------------------------------
    # suspend / unsuspend / terminate
    # ------------------------------------------------------------------

    def suspend(self) -> bool:
        return self._server_action("suspend", lambda compute, veid: compute.suspend_server(veid))

    def unsuspend(self) -> bool:
        return self._server_action("unsuspend", lambda compute, veid: compute.resume_server(veid))

    def terminate(self) -> bool:
        ok = self._server_action(
            "terminate",
            lambda compute, veid: compute.delete_server(veid, ignore_missing=False),
        )
        if ok:
            self.state.veid = None
        return ok

    def _server_action(self, command: str, call: Callable[[Any, str], Any]) -> bool:
        self.errors.clear()
        with command_scope(command):
            veid = self.state.veid
            if not veid:
                return self._reject(
                    PreconditionError(f"Cannot {command}: no server ID is set", operation=command),
                )

            def _run(compute: Any) -> Outcome[None]:
                try:
                    call(compute, veid)
                except Exception as exc:
                    return Outcome.failure(
                        ProviderOperationError(
                            f"Unable to {command} server {veid}: {exc}",
                            operation=command,
                            details={"server_id": veid},
                        ),
                    )
                return Outcome.success(None)

            if not self._execute(_run).ok:
                return False
            logger.info("[openstack] %s accepted for server %s", command.capitalize(), veid)
            return True

    # ------------------------------------------------------------------
    # get_plans
    # ------------------------------------------------------------------

    def get_plans(self) -> list[PlanOption] | None:
        self.errors.clear()
        with command_scope("get_plans"):
            outcome = self._execute(_list_plans)
            if not outcome.ok:
                return None
            plans: list[PlanOption] = outcome.value  # type: ignore[assignment]
            logger.info("[openstack] Found %d flavors", len(plans))
            return plans

    # ------------------------------------------------------------------
    # three-phase execution
    # ------------------------------------------------------------------

    def _execute(self, operation: Callable[[Any], Outcome[T]]) -> Outcome[T]:
        """Authenticate, resolve compute, run *operation*; record any failure."""
        auth = self._sessions.authenticate(self.state.credentials)
        if not auth.ok:
            self._record(auth.error)
            return Outcome.failure(auth.error)  # type: ignore[arg-type]

        try:
            compute = _resolve_compute(auth.value)
            if not compute.ok:
                self._record(compute.error)
                return Outcome.failure(compute.error)  # type: ignore[arg-type]

            result = operation(compute.value)
            if not result.ok:
                self._record(result.error)
            return result
        finally:
            self._sessions.release()

    def _record(self, error: ConnectorError | None) -> None:
        if error is not None:
            self.errors.record(error)

    def _reject(self, error: ConnectorError) -> bool:
        self._record(error)
        return False


# ---------------------------------------------------------------------------
# helpers
# ---------------------------------------------------------------------------


def _resolve_compute(conn: Any) -> Outcome[Any]:
    """Return the compute proxy of *conn* for the fixed region."""
    try:
        if not conn.has_service(COMPUTE_SERVICE_TYPE):
            return Outcome.failure(
                ProviderOperationError(
                    f"No {COMPUTE_SERVICE_TYPE} service available in {COMPUTE_REGION}",
                ),
            )
        return Outcome.success(conn.compute)
    except Exception as exc:
        return Outcome.failure(
            ProviderOperationError(f"Unable to reach the {COMPUTE_SERVICE_TYPE} service: {exc}"),
        )


def _list_plans(compute: Any) -> Outcome[list[PlanOption]]:
    try:
        flavors = list(compute.flavors(details=True))
        return Outcome.success([plan_from_flavor(flv) for flv in flavors])
    except Exception as exc:
        return Outcome.failure(
            ProviderOperationError(
                f"Unable to get plans from the server: {exc}",
                operation="get_plans",
            ),
        )


def select_image(images: Iterable[Any], match: str = IMAGE_NAME_MATCH) -> Any | None:
    """Return the first image whose name contains *match* (case-sensitive)."""
    for image in images:
        if match in (image.name or ""):
            return image
    return None


def format_gib(ram_mb: int | float) -> str:
    """MiB to GiB as the host displays it: unrounded, no trailing ``.0``."""
    return format(ram_mb / 1024, ".14g")


def plan_from_flavor(flavor: Any) -> PlanOption:
    """Build the selectable plan for one Nova flavor."""
    label = (
        f"{flavor.name} ({format_gib(flavor.ram or 0)} GB / "
        f"{flavor.vcpus or 0} CPU / {flavor.disk or 0} GB)"
    )
    return PlanOption(id=str(flavor.id), label=label)
