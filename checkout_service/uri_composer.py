"""Resolution of catalog picture URIs."""

CATALOG_BASE_URL_PLACEHOLDER = "http://catalogbaseurltobereplaced"


class UriComposer:
    """Rewrites the placeholder base URL stored with catalog pictures.

    Args:
        catalog_base_url (str): Base URL the catalog pictures are served from.
    """

    def __init__(self, catalog_base_url: str):
        self.catalog_base_url = catalog_base_url.rstrip("/")

    def compose_pic_uri(self, uri_template: str) -> str:
        """Return the picture URI with the placeholder replaced by the catalog base URL."""
        return uri_template.replace(CATALOG_BASE_URL_PLACEHOLDER, self.catalog_base_url)
