from enum import Enum


class LinkType(Enum):
    HYPERLINK = "hyperlink"
    IMAGE = "image"


class Link:
    def __init__(self, target_url: str, type: LinkType, is_external: bool = False):
        self.target_url = target_url
        self.type = type
        self.is_external = bool(is_external)

    def __eq__(self, other):
        if not isinstance(other, Link):
            return NotImplemented
        return (self.target_url, self.type, self.is_external) == (other.target_url, other.type, other.is_external)

    def __hash__(self):
        return hash((self.target_url, self.type, self.is_external))

    def __repr__(self):
        return f"<Link {self.type.value} to={self.target_url} external={self.is_external}>"
