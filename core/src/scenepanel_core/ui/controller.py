"""Control panel logic, independent of any browser or template.

A controller owns one page's worth of panel state: the document (log + entry list), the
server record behind each entry and the current selection. Every user action arrives as a
message through ``dispatch``; network calls are the only points where it suspends.
"""

from __future__ import annotations

import itertools
import logging
from collections.abc import Callable, Mapping
from typing import Any, Final

import httpx

from scenepanel_core.ui.document import SELECTED_CLASS, Document, ElementNotFoundError, EntryNode
from scenepanel_core.ui.forms import DEFAULT_FORMS, FORM_CONTENT_TYPE, FormRegistry, serialize
from scenepanel_core.ui.messages import DeleteRequested, EntrySelected, PanelMessage, SubmitForm

logger = logging.getLogger(__name__)

ClientFactory = Callable[[], httpx.AsyncClient]


class _Undefined:
    def __repr__(self) -> str:
        return "undefined"


UNDEFINED: Final = _Undefined()


def to_display_text(value: Any) -> str:
    """Render a JSON value the way a browser prints it when concatenated to a string."""

    if value is UNDEFINED:
        return "undefined"
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, Mapping):
        return "[object Object]"
    if isinstance(value, list):
        return ",".join("" if v is None else to_display_text(v) for v in value)
    return str(value)


def _error_text(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        body = UNDEFINED
    if isinstance(body, Mapping) and "result" in body:
        return to_display_text(body["result"])
    return response.text or f"{response.status_code} {response.reason_phrase}"


class _RequestFailed(Exception):
    def __init__(self, text: str) -> None:
        super().__init__(text)
        self.text = text


class PanelController:
    def __init__(
        self,
        client_factory: ClientFactory,
        *,
        document: Document | None = None,
        forms: FormRegistry = DEFAULT_FORMS,
        delete_endpoint: str = "/delete",
    ) -> None:
        self._client_factory = client_factory
        self.document = document if document is not None else Document()
        self.forms = forms
        self.delete_endpoint = delete_endpoint
        self.records: dict[int, dict[str, Any]] = {}
        self._selected: int | None = None
        self._node_ids = itertools.count()

    @property
    def selected(self) -> int | None:
        return self._selected

    async def dispatch(self, message: PanelMessage) -> None:
        if isinstance(message, SubmitForm):
            await self.submit(message.form_name, message.fields)
        elif isinstance(message, EntrySelected):
            self.select(message.node_id)
        elif isinstance(message, DeleteRequested):
            await self.delete_selected()
        else:
            raise TypeError(f"unsupported panel message: {message!r}")

    def log(self, text: str) -> None:
        self.document.command_log.append_line(text)

    async def _send(self, method: str, url: str, **kwargs: Any) -> Any:
        """Send one request and return its decoded JSON body.

        Transport errors, non-2xx statuses and undecodable bodies all raise _RequestFailed.
        """

        try:
            async with self._client_factory() as client:
                response = await client.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            logger.warning("%s %s failed: %s", method, url, e)
            raise _RequestFailed(str(e) or type(e).__name__) from e

        if not response.is_success:
            logger.warning("%s %s returned %d", method, url, response.status_code)
            raise _RequestFailed(_error_text(response))

        try:
            return response.json()
        except ValueError as e:
            logger.warning("%s %s returned a non-JSON body", method, url)
            raise _RequestFailed(
                response.text or f"{response.status_code} {response.reason_phrase}"
            ) from e

    async def submit(self, form_name: str, fields: Mapping[str, str]) -> None:
        form = self.forms.get(form_name)
        body = serialize(form, fields)
        # GET forms carry their fields in the query string, like jQuery's $.ajax.
        if form.method == "GET":
            request_kwargs: dict[str, Any] = {"params": body}
        else:
            request_kwargs = {"content": body, "headers": {"Content-Type": FORM_CONTENT_TYPE}}

        try:
            data = await self._send(form.method, form.action, **request_kwargs)
            result = data.get("result", UNDEFINED) if isinstance(data, Mapping) else UNDEFINED
            if not isinstance(result, Mapping):
                raise _RequestFailed(to_display_text(result))
        except _RequestFailed as e:
            self.log(f"POST error {form_name}: {e.text}")
            return

        self.log(f"POST {form_name}: {to_display_text(result.get('id', UNDEFINED))}")
        self.add_element(dict(result))

    def add_element(self, entry: dict[str, Any]) -> EntryNode:
        selector = self.document.selector

        label = to_display_text(entry.get("type", UNDEFINED)) + to_display_text(
            entry.get("id", UNDEFINED)
        )
        node = EntryNode(node_id=next(self._node_ids), label=label)
        self.records[node.node_id] = entry

        selector.append(node)
        self.select(node.node_id)
        return node

    def select(self, node_id: int) -> None:
        selector = self.document.selector
        node = selector.find(node_id)
        if node is None:
            raise ElementNotFoundError(f"no entry node {node_id} in #{selector.element_id}")

        if self._selected is not None:
            previous = selector.find(self._selected)
            if previous is not None:
                previous.classes.discard(SELECTED_CLASS)
        self._selected = node_id
        node.classes.add(SELECTED_CLASS)

    async def delete_selected(self) -> None:
        node_id = self._selected
        if node_id is None:
            return

        record = self.records.get(node_id, {})
        payload: dict[str, Any] = {"type": "_delete"}
        # An entry without an id is sent without one, like JSON.stringify drops undefined.
        if "id" in record:
            payload["id"] = record["id"]

        try:
            data = await self._send("PUT", self.delete_endpoint, json=payload)
        except _RequestFailed as e:
            self.log(f"delete error: {e.text}")
            return

        result = data.get("result", UNDEFINED) if isinstance(data, Mapping) else UNDEFINED
        self.log(f"delete: {to_display_text(result)}")

        selector = self.document.selector
        node = selector.find(node_id)
        if node is not None:
            selector.remove(node)
        self.records.pop(node_id, None)
        if self._selected == node_id:
            self._selected = None

    def snapshot(self) -> dict[str, Any]:
        return {
            "log": [line.text for line in self.document.command_log.lines],
            "entries": [
                {
                    "node_id": node.node_id,
                    "label": node.label,
                    "selected": node.selected,
                    "record": self.records.get(node.node_id),
                }
                for node in self.document.selector
            ],
            "selected": self._selected,
        }
