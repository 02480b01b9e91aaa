"""BaseService — foundation for all mdsite services.

Every service receives a :class:`Site` at construction time. The Site
provides resolved source/output paths, render options, and the page
template environment.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from mdsite.infrastructure.site import Site


class BaseService:
    """Base for all service-layer classes.

    Usage::

        class BuildService(BaseService):
            def build(self) -> ServiceResult:
                for path in self._site.source_files():
                    ...
    """

    def __init__(self, site: Site) -> None:
        self._site = site
