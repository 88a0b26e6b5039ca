import re

from .deferred import Deferred

_NAME_SEPARATORS = re.compile(r"[^0-9A-Za-z]+")


def to_camel_case(name):
    """``my-native_lib`` becomes ``MyNativeLib``."""
    return "".join(word[:1].upper() + word[1:] for word in _NAME_SEPARATORS.split(name) if word)


class Project:
    """The project owning a component.

    ``group`` and ``version`` may change while the project is being
    configured, so consumers read them through :meth:`provider` rather than
    copying them.
    """

    def __init__(self, name, group="", version="unspecified"):
        self.name = name
        self.group = group
        self.version = version

    def provider(self, supplier, description=None):
        return Deferred(supplier, description=description)

    def group_provider(self):
        return self.provider(lambda: str(self.group), description=f"group of project '{self.name}'")

    def version_provider(self):
        return self.provider(lambda: str(self.version), description=f"version of project '{self.name}'")

    def __repr__(self):
        return f"Project({self.name!r}, group={self.group!r}, version={self.version!r})"
