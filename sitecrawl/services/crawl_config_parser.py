from typing import Any, Optional

import yaml

from sitecrawl.domain.crawl_config import CrawlConfig, CrawlLinksConfig, HttpConfig


class CrawlConfigParser:
    """Parse a YAML crawl settings file into a CrawlConfig.

    Responsibility: schema/validation for YAML config files. Values passed as
    `overrides` (already-parsed CLI flags) win over the file; `None` means
    "not given". Malformed files and values raise ValueError.

    Supported keys:
      throttle: int
      host: string
      auth: { user: string, password: string }
      links: { external: bool, hyperlinks: bool, images: bool }
    """

    def load(self, path: str) -> dict:
        with open(path, "r", encoding="utf-8") as f:
            try:
                data = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ValueError(f"Crawl config {path!r} is not valid YAML: {e}") from e
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ValueError(f"Crawl config {path!r} must be a mapping")
        return data

    def _section(self, data: dict, name: str) -> dict:
        section = data.get(name)
        if section is None:
            return {}
        if not isinstance(section, dict):
            raise ValueError(f"'{name}' must be a mapping")
        return section

    def _flag(self, section: dict, key: str) -> Optional[bool]:
        value = section.get(key)
        if value is not None and not isinstance(value, bool):
            raise ValueError(f"'links.{key}' must be true or false, got {value!r}")
        return value

    def parse(self, data: Optional[dict] = None, *, fetcher=None, default_throttle: int = 1, **overrides: Any) -> CrawlConfig:
        data = data or {}
        auth = self._section(data, "auth")
        links = self._section(data, "links")

        def pick(key, file_value, default=None):
            value = overrides.get(key)
            if value is not None:
                return value
            return file_value if file_value is not None else default

        throttle = pick("throttle", data.get("throttle"), default_throttle)
        if isinstance(throttle, bool) or not isinstance(throttle, int):
            raise ValueError(f"'throttle' must be an integer, got {throttle!r}")

        return CrawlConfig(
            throttle=throttle,
            host=pick("host", data.get("host")),
            http=HttpConfig(
                user=pick("user", auth.get("user")),
                password=pick("password", auth.get("password")),
            ),
            links=CrawlLinksConfig(
                crawl_external_links=pick("crawl_external_links", self._flag(links, "external"), False),
                crawl_hyperlinks=pick("crawl_hyperlinks", self._flag(links, "hyperlinks"), False),
                crawl_images=pick("crawl_images", self._flag(links, "images"), False),
            ),
            fetcher=fetcher,
        )
