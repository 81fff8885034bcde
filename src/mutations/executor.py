"""
Mutation executor for add/update/delete row requests.
"""
from __future__ import annotations

import time
from typing import Any, Callable, Mapping, Optional

from loguru import logger

from datasource import DatasourceRequest, ReplaceVariables, identity_replace
from exceptions import MutationError, QueryError
from metrics import record_mutation
from models import MutationOperation, RequestConfig, TableConfig
from notifications import Notifier
from variables import VariableStore

from .actions import on_request_success
from .errors import get_error_message

DEFAULT_SUCCESS_MESSAGES: dict[str, str] = {
    "add": "Row added successfully.",
    "update": "Values updated successfully.",
    "delete": "Row deleted successfully.",
}


class MutationExecutor:
    """
    Performs the remote write for one table and reports the outcome.

    Writes are sent once, without transport retries. On failure the error is
    reported to the notifier and raised as ``MutationError`` so the calling
    session keeps its draft.
    """

    def __init__(
        self,
        table: Optional[TableConfig],
        request: DatasourceRequest,
        *,
        variable_store: Optional[VariableStore] = None,
        refresh: Optional[Callable[[], None]] = None,
        notifier: Optional[Notifier] = None,
        replace_variables: ReplaceVariables = identity_replace,
    ):
        """
        Initialize the executor.

        Args:
            table: Table configuration holding the request descriptors
            request: Datasource request collaborator
            variable_store: Store used for the highlight-reset path
            refresh: Dashboard refresh callback
            notifier: Success/error notification sink
            replace_variables: Template interpolation for queries and messages
        """
        self.table = table
        self._request = request
        self._variable_store = variable_store
        self._refresh = refresh or (lambda: None)
        self._notifier = notifier or Notifier()
        self._replace_variables = replace_variables

    def get_request_config(self, operation: MutationOperation) -> Optional[RequestConfig]:
        if self.table is None:
            return None
        return self.table.get_request(operation)

    def get_success_message(self, operation: MutationOperation, request: RequestConfig) -> str:
        if request.success_message:
            return self._replace_variables(request.success_message)
        return DEFAULT_SUCCESS_MESSAGES[operation]

    async def execute(self, operation: MutationOperation, row: Mapping[str, Any]) -> None:
        """
        Execute one mutation.

        Raises:
            MutationError: If the request fails or the datasource reports an error
        """
        request = self.get_request_config(operation)

        if request is None:
            logger.debug(f"No {operation} request configured, skipping")
            record_mutation(operation, "skipped")
            return

        start_time = time.time()

        try:
            response = await self._request(
                query=request.payload,
                datasource=request.datasource,
                payload=dict(row),
                replace_variables=self._replace_variables,
                retry=False,
            )

            if response.is_error:
                raise QueryError(response.errors)

            message = self.get_success_message(operation, request)
            reset = on_request_success(
                lambda: self._notifier.success("Success", message),
                self._refresh,
                self._variable_store,
                self.table,
                operation,
                row,
            )
        except Exception as e:
            duration = time.time() - start_time
            error_message = f"{operation} Error: {get_error_message(e)}"
            logger.error(f"Mutation failed after {duration:.3f}s: {error_message}")
            self._notifier.error("Error", error_message)
            record_mutation(operation, "error", duration)
            raise MutationError(operation, get_error_message(e)) from e

        duration = time.time() - start_time
        record_mutation(operation, "success", duration)
        logger.info(
            f"{operation} completed in {duration:.3f}s"
            + (" (highlight variable reset)" if reset else "")
        )

    def __call__(self, operation: MutationOperation, row: Mapping[str, Any]):
        """
        Call operator, allows the executor to be passed where a save callback is expected.
        """
        return self.execute(operation, row)


__all__ = ["MutationExecutor", "DEFAULT_SUCCESS_MESSAGES"]
