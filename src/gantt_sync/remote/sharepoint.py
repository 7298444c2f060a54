# src/gantt_sync/remote/sharepoint.py

from __future__ import annotations

"""
SharePoint REST list store (odata=verbose).

Field names arriving from the engine are UI-level camelCase names; the list's
internal names are the same with a leading capital ("assignedToId" ->
"AssignedToId"). PercentComplete is stored as a 0..1 fraction on the list and as
0..100 everywhere else.
"""

import logging
from datetime import date, datetime
from enum import Enum
from typing import Any

import httpx

from ..core.ports import ListLocator
from ..tasks.task_models import ChoiceOption, Predecessor, ResolvedPerson, Task, TaskStatus

logger = logging.getLogger(__name__)

ODATA_VERBOSE = "application/json;odata=verbose"

ITEM_SELECT = ",".join(
    [
        "Id",
        "Title",
        "StartDate",
        "DueDate",
        "PercentComplete",
        "Status",
        "Priority",
        "AssignedTo/Id",
        "AssignedTo/Name",
        "AssignedTo/Title",
        "Predecessors/Id",
        "Predecessors/Title",
    ]
)
ITEM_EXPAND = "AssignedTo,Predecessors"
PAGE_SIZE = 500


class RemoteStoreError(RuntimeError):
    """HTTP-level failure talking to the list (status code + body excerpt)."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)


def _to_internal_name(field_name: str) -> str:
    if not field_name:
        return field_name
    return field_name[0].upper() + field_name[1:]


def _odata_quote(value: str) -> str:
    return "'" + value.replace("'", "''") + "'"


def _parse_datetime(raw: Any) -> datetime | None:
    if not raw or not isinstance(raw, str):
        return None
    try:
        return datetime.fromisoformat(raw)
    except ValueError:
        logger.warning("Unparseable date from list: %r", raw)
        return None


def _results(node: Any) -> list[dict[str, Any]]:
    # Expanded multi-value lookups come back as {"results": [...]};
    # a single-value lookup is a plain object; an empty one may be null.
    if node is None:
        return []
    if isinstance(node, dict):
        if "results" in node:
            return [r for r in node["results"] if isinstance(r, dict)]
        if "__deferred" in node:
            return []
        return [node]
    if isinstance(node, list):
        return [r for r in node if isinstance(r, dict)]
    return []


def _percent_from_list(raw: Any) -> int:
    if raw is None:
        return 0
    try:
        return max(0, min(100, round(float(raw) * 100)))
    except (TypeError, ValueError):
        return 0


def task_from_item(item: dict[str, Any]) -> Task:
    assigned = tuple(
        ResolvedPerson(
            id=int(p["Id"]),
            account_name=str(p.get("Name") or ""),
            display_name=str(p.get("Title") or ""),
        )
        for p in _results(item.get("AssignedTo"))
        if p.get("Id") is not None
    )
    preds = tuple(
        Predecessor(id=int(p["Id"]), title=str(p.get("Title") or ""))
        for p in _results(item.get("Predecessors"))
        if p.get("Id") is not None
    )
    return Task(
        id=int(item["Id"]),
        title=str(item.get("Title") or ""),
        start_date=_parse_datetime(item.get("StartDate")),
        due_date=_parse_datetime(item.get("DueDate")),
        percent_complete=_percent_from_list(item.get("PercentComplete")),
        status=str(item.get("Status") or TaskStatus.NOT_STARTED),
        priority=item.get("Priority"),
        assigned_to=assigned,
        predecessors=preds,
    )


def to_wire_value(field_name: str, value: Any) -> Any:
    if field_name == "percentComplete" and value is not None:
        return float(value) / 100.0
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, Enum):
        return value.value
    return value


class SharePointTaskList:
    """
    Async list store over the SharePoint REST API.

    Owns its httpx.AsyncClient unless one is injected (tests pass a client
    built on httpx.MockTransport). Use as an async context manager or call aclose().
    """

    def __init__(
            self,
            *,
            access_token: str | None = None,
            timeout_seconds: float = 20.0,
            verify_tls: bool = True,
            client: httpx.AsyncClient | None = None,
    ) -> None:
        headers = {"Accept": ODATA_VERBOSE, "Content-Type": ODATA_VERBOSE}
        if access_token:
            headers["Authorization"] = f"Bearer {access_token}"

        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            timeout=httpx.Timeout(timeout_seconds, connect=min(5.0, timeout_seconds)),
            verify=verify_tls,
        )
        self._headers = headers
        self._entity_types: dict[ListLocator, str] = {}

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> SharePointTaskList:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    # ---- low-level helpers ----

    @staticmethod
    def _list_url(locator: ListLocator) -> str:
        site = locator.site_url.rstrip("/")
        return f"{site}/_api/web/lists/getbytitle({_odata_quote(locator.list_title)})"

    async def _request(
            self,
            method: str,
            url: str,
            *,
            params: dict[str, Any] | None = None,
            json: Any = None,
            headers: dict[str, str] | None = None,
    ) -> dict[str, Any]:
        merged = dict(self._headers)
        if headers:
            merged.update(headers)

        try:
            resp = await self._client.request(method, url, params=params, json=json, headers=merged)
        except httpx.HTTPError as e:
            raise RemoteStoreError(f"{method} {url} failed: {e.__class__.__name__}: {e}") from e

        if resp.is_error:
            excerpt = resp.text[:300]
            raise RemoteStoreError(
                f"{method} {url} -> HTTP {resp.status_code}: {excerpt}",
                status_code=resp.status_code,
            )

        if resp.status_code == 204 or not resp.content:
            return {}

        data = resp.json()
        if not isinstance(data, dict):
            raise RemoteStoreError(f"{method} {url}: expected a JSON object")
        return data.get("d", data)

    async def _fetch_choices(self, locator: ListLocator, field_title: str) -> list[ChoiceOption]:
        url = f"{self._list_url(locator)}/fields/getbyinternalnameortitle({_odata_quote(field_title)})"
        data = await self._request("GET", url, params={"$select": "Choices"})
        choices = data.get("Choices") or {}
        raw = choices.get("results", []) if isinstance(choices, dict) else choices
        return [ChoiceOption(key=str(c), text=str(c)) for c in raw]

    async def _entity_type(self, locator: ListLocator) -> str:
        cached = self._entity_types.get(locator)
        if cached:
            return cached
        data = await self._request("GET", self._list_url(locator), params={"$select": "ListItemEntityTypeFullName"})
        entity_type = str(data.get("ListItemEntityTypeFullName") or "")
        if not entity_type:
            raise RemoteStoreError(f"List {locator.list_title!r} did not report its item entity type")
        self._entity_types[locator] = entity_type
        return entity_type

    # ---- TaskListStore ----

    async def fetch_tasks(self, locator: ListLocator) -> list[Task]:
        url: str | None = f"{self._list_url(locator)}/items"
        params: dict[str, Any] | None = {
            "$select": ITEM_SELECT,
            "$expand": ITEM_EXPAND,
            "$orderby": "Id",
            "$top": PAGE_SIZE,
        }

        tasks: list[Task] = []
        while url:
            data = await self._request("GET", url, params=params)
            for item in data.get("results", []):
                tasks.append(task_from_item(item))
            # __next already carries the query string.
            url = data.get("__next")
            params = None

        logger.debug("Fetched %d items from list=%s", len(tasks), locator.list_title)
        return tasks

    async def fetch_status_options(self, locator: ListLocator) -> list[ChoiceOption]:
        return await self._fetch_choices(locator, "Status")

    async def fetch_priority_options(self, locator: ListLocator) -> list[ChoiceOption]:
        return await self._fetch_choices(locator, "Priority")

    async def lookup_identity_by_account_name(self, locator: ListLocator, account_name: str) -> int:
        url = f"{locator.site_url.rstrip('/')}/_api/web/ensureuser"
        data = await self._request("POST", url, json={"logonName": account_name})
        identity = data.get("Id")
        if identity is None:
            raise RemoteStoreError(f"No site user for account {account_name!r}")
        return int(identity)

    async def persist_field(
            self,
            locator: ListLocator,
            task_id: int,
            remote_field_name: str,
            remote_value: Any,
    ) -> None:
        entity_type = await self._entity_type(locator)
        body = {
            "__metadata": {"type": entity_type},
            _to_internal_name(remote_field_name): to_wire_value(remote_field_name, remote_value),
        }
        url = f"{self._list_url(locator)}/items({int(task_id)})"
        await self._request("POST", url, json=body, headers={"X-HTTP-Method": "MERGE", "IF-MATCH": "*"})
        logger.debug("MERGE task_id=%s field=%s", task_id, remote_field_name)
