from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from urllib.parse import urlencode

from scenepanel_core.config import FormConfig, UiConfig

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


class UnknownFormError(LookupError):
    """Raised when a submission names a form the panel does not declare."""


@dataclass(frozen=True)
class FormSpec:
    selector: str
    method: str
    action: str
    fields: dict[str, str] = field(default_factory=dict)

    @property
    def name(self) -> str:
        return self.selector.lstrip("#")

    @classmethod
    def from_config(cls, cfg: FormConfig) -> FormSpec:
        return cls(
            selector=cfg.selector,
            method=cfg.method.upper(),
            action=cfg.action,
            fields=dict(cfg.fields),
        )


def serialize(form: FormSpec, values: Mapping[str, str]) -> str:
    """URL-encode a form's field set.

    Only the form's declared fields are sent, in declaration order. A field missing from
    ``values`` is sent with its declared default.
    """

    pairs = [(name, values.get(name, default)) for name, default in form.fields.items()]
    return urlencode(pairs)


class FormRegistry:
    def __init__(self, forms: Iterable[FormSpec]) -> None:
        self._forms: dict[str, FormSpec] = {f.selector: f for f in forms}

    @classmethod
    def from_config(cls, cfg: UiConfig) -> FormRegistry:
        return cls(FormSpec.from_config(f) for f in cfg.forms)

    def get(self, selector: str) -> FormSpec:
        form = self._forms.get(selector)
        if form is None:
            raise UnknownFormError(f"no form matches {selector!r}")
        return form

    def __iter__(self) -> Iterator[FormSpec]:
        return iter(self._forms.values())


DEFAULT_FORMS = FormRegistry.from_config(UiConfig())
