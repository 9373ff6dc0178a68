"""
Launch Service.

One method per launch operation of the ReportPortal API:
- List launches (regular or debug mode), optionally filtered.
- Get, start, finish (or force-stop), delete, update a launch.
- Merge several launches.
- Trigger an analysis strategy on a launch.

LaunchService issues blocking calls through RestClient; AsyncLaunchService
has the same methods as coroutines over AsyncRestClient.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

from loguru import logger

from reportportal_client.client.async_rest_client import AsyncRestClient
from reportportal_client.client.rest_client import RestClient
from reportportal_client.filtering.filter_option import FilterOption
from reportportal_client.models.common import Message
from reportportal_client.models.launch import Launch, LaunchesContainer
from reportportal_client.models.payloads import (
    FinishLaunchRequest,
    MergeLaunchesRequest,
    StartLaunchRequest,
    UpdateLaunchRequest,
)
from reportportal_client.service.context import ServiceContext

DEFAULT_ANALYZE_STRATEGY = "history"

# (method, path, params, body)
RequestSpec = Tuple[str, str, Optional[Dict[str, str]], Optional[Dict[str, Any]]]


# ---------------------------------------------------------------------------
# Request builders (shared by the sync and async services)
# ---------------------------------------------------------------------------


def _list_request(
    ctx: ServiceContext, filter_option: Optional[FilterOption], debug: bool
) -> RequestSpec:
    path = ctx.path("launch", "mode") if debug else ctx.path("launch")
    params = filter_option.to_params() if filter_option is not None else None
    return "GET", path, params, None


def _get_request(ctx: ServiceContext, launch_id: str) -> RequestSpec:
    return "GET", ctx.path("launch", launch_id), None, None


def _start_request(ctx: ServiceContext, model: StartLaunchRequest) -> RequestSpec:
    return "POST", ctx.path("launch", trailing_slash=True), None, model.to_dict()


def _finish_request(
    ctx: ServiceContext, launch_id: str, model: FinishLaunchRequest, force: bool
) -> RequestSpec:
    action = "stop" if force else "finish"
    return "PUT", ctx.path("launch", launch_id, action), None, model.to_dict()


def _delete_request(ctx: ServiceContext, launch_id: str) -> RequestSpec:
    return "DELETE", ctx.path("launch", launch_id), None, None


def _merge_request(ctx: ServiceContext, model: MergeLaunchesRequest) -> RequestSpec:
    return "POST", ctx.path("launch", "merge"), None, model.to_dict()


def _update_request(
    ctx: ServiceContext, launch_id: str, model: UpdateLaunchRequest
) -> RequestSpec:
    return "PUT", ctx.path("launch", launch_id, "update"), None, model.to_dict()


def _analyze_request(ctx: ServiceContext, launch_id: str, strategy: str) -> RequestSpec:
    return "POST", ctx.path("launch", launch_id, "analyze", strategy), None, None


# ---------------------------------------------------------------------------
# Synchronous service
# ---------------------------------------------------------------------------


class LaunchService:
    """
    Launch operations over a blocking RestClient.

    Every method raises ServiceError (NotFoundError for 404) on a
    non-success response, TransportError when no response arrives, and
    DeserializationError when the body does not match the result model.
    """

    def __init__(self, context: ServiceContext[RestClient]) -> None:
        self._ctx = context

    def _execute(self, spec: RequestSpec) -> Any:
        method, path, params, body = spec
        return self._ctx.client.execute(method, path, params=params, json_body=body)

    def get_launches(
        self,
        filter_option: Optional[FilterOption] = None,
        debug: bool = False,
    ) -> LaunchesContainer:
        """
        Return a page of launches of the current project.

        Args:
            filter_option: Criteria, paging and sorting for the query.
            debug: List the user's debug launches instead of regular ones.

        Returns:
            LaunchesContainer with the launches and paging metadata.
        """
        body = self._execute(_list_request(self._ctx, filter_option, debug))
        return LaunchesContainer.from_dict(body)

    def get_launch(self, launch_id: str) -> Launch:
        """
        Return the launch with the given identifier.

        Raises:
            NotFoundError: If the launch does not exist.
        """
        return Launch.from_dict(self._execute(_get_request(self._ctx, launch_id)))

    def start_launch(self, model: StartLaunchRequest) -> Launch:
        """Create a new launch and return its representation."""
        launch = Launch.from_dict(self._execute(_start_request(self._ctx, model)))
        logger.info(f"Launch started: '{model.name}' (id={launch.id})")
        return launch

    def finish_launch(
        self,
        launch_id: str,
        model: FinishLaunchRequest,
        force: bool = False,
    ) -> Message:
        """
        Finish a launch.

        Args:
            launch_id: Launch identifier.
            model: Finish payload (end time, optional status).
            force: Stop the launch even if test items are still in progress.

        Returns:
            Service acknowledgement.
        """
        body = self._execute(_finish_request(self._ctx, launch_id, model, force))
        logger.info(f"Launch {'stopped' if force else 'finished'}: {launch_id}")
        return Message.from_dict(body)

    def delete_launch(self, launch_id: str) -> Message:
        """Delete a launch."""
        body = self._execute(_delete_request(self._ctx, launch_id))
        logger.info(f"Launch deleted: {launch_id}")
        return Message.from_dict(body)

    def merge_launches(self, model: MergeLaunchesRequest) -> Launch:
        """Merge several launches and return the resulting launch."""
        launch = Launch.from_dict(self._execute(_merge_request(self._ctx, model)))
        logger.info(f"Launches merged: {model.launches} -> {launch.id}")
        return launch

    def update_launch(self, launch_id: str, model: UpdateLaunchRequest) -> Message:
        """Update description, mode or tags of a launch."""
        return Message.from_dict(
            self._execute(_update_request(self._ctx, launch_id, model))
        )

    def analyze_launch(
        self,
        launch_id: str,
        strategy: str = DEFAULT_ANALYZE_STRATEGY,
    ) -> Message:
        """
        Run an analysis strategy on a launch.

        Args:
            launch_id: Launch identifier.
            strategy: Analyzer strategy; the known one is "history".
        """
        body = self._execute(_analyze_request(self._ctx, launch_id, strategy))
        logger.info(f"Launch analysis requested: {launch_id} (strategy={strategy})")
        return Message.from_dict(body)


# ---------------------------------------------------------------------------
# Asynchronous service
# ---------------------------------------------------------------------------


class AsyncLaunchService:
    """Launch operations as coroutines over a non-blocking AsyncRestClient."""

    def __init__(self, context: ServiceContext[AsyncRestClient]) -> None:
        self._ctx = context

    async def _execute(self, spec: RequestSpec) -> Any:
        method, path, params, body = spec
        return await self._ctx.client.execute(method, path, params=params, json_body=body)

    async def get_launches(
        self,
        filter_option: Optional[FilterOption] = None,
        debug: bool = False,
    ) -> LaunchesContainer:
        body = await self._execute(_list_request(self._ctx, filter_option, debug))
        return LaunchesContainer.from_dict(body)

    async def get_launch(self, launch_id: str) -> Launch:
        return Launch.from_dict(await self._execute(_get_request(self._ctx, launch_id)))

    async def start_launch(self, model: StartLaunchRequest) -> Launch:
        launch = Launch.from_dict(await self._execute(_start_request(self._ctx, model)))
        logger.info(f"Launch started: '{model.name}' (id={launch.id})")
        return launch

    async def finish_launch(
        self,
        launch_id: str,
        model: FinishLaunchRequest,
        force: bool = False,
    ) -> Message:
        body = await self._execute(_finish_request(self._ctx, launch_id, model, force))
        logger.info(f"Launch {'stopped' if force else 'finished'}: {launch_id}")
        return Message.from_dict(body)

    async def delete_launch(self, launch_id: str) -> Message:
        body = await self._execute(_delete_request(self._ctx, launch_id))
        logger.info(f"Launch deleted: {launch_id}")
        return Message.from_dict(body)

    async def merge_launches(self, model: MergeLaunchesRequest) -> Launch:
        launch = Launch.from_dict(await self._execute(_merge_request(self._ctx, model)))
        logger.info(f"Launches merged: {model.launches} -> {launch.id}")
        return launch

    async def update_launch(self, launch_id: str, model: UpdateLaunchRequest) -> Message:
        return Message.from_dict(
            await self._execute(_update_request(self._ctx, launch_id, model))
        )

    async def analyze_launch(
        self,
        launch_id: str,
        strategy: str = DEFAULT_ANALYZE_STRATEGY,
    ) -> Message:
        body = await self._execute(_analyze_request(self._ctx, launch_id, strategy))
        logger.info(f"Launch analysis requested: {launch_id} (strategy={strategy})")
        return Message.from_dict(body)
