"""
SharePoint document fetcher.

Downloads document bytes from SharePoint through Microsoft Graph using an
app-only token. Supports a most-privileged path (drive-scoped) and a
least-privileged path that resolves the site first, for tenants granting
Sites.Selected only.

Dependencies: httpx, azure.identity
System role: Source of document bytes for upload and chunking
"""

import logging
from enum import Enum
from urllib.parse import quote, urlparse

import httpx
from azure.core.credentials_async import AsyncTokenCredential

from sharepoint_knowledge.core.constants import GRAPH_BASE_URL, GRAPH_SCOPE
from sharepoint_knowledge.core.exceptions import FetchFailedError, InvalidReferenceError
from sharepoint_knowledge.models.document import DocumentReference
from sharepoint_knowledge.observability.log_utils import document_context

logger = logging.getLogger(__name__)


class FetchPrivilege(str, Enum):
    """Graph permission model used to reach a document."""

    MOST = "most"
    LEAST = "least"


REQUIRED_FIELDS = ("drive_id", "item_id", "name", "url")


def site_path_from_url(url: str) -> tuple[str, str]:
    """
    Split a SharePoint document URL into host and site-relative path.

    The site path is the first two path segments (e.g. ``sites/hr``).

    Raises:
        InvalidReferenceError: When the URL has no host or fewer than two segments
    """
    parsed = urlparse(url.strip())
    segments = [segment for segment in parsed.path.split("/") if segment]
    if not parsed.hostname or len(segments) < 2:
        raise InvalidReferenceError(
            "Document URL does not contain a SharePoint site path",
            field="url",
            details={"url": url},
        )
    return parsed.hostname, f"{segments[0]}/{segments[1]}"


class DocumentFetcher:
    """Fetches document content from SharePoint via Microsoft Graph."""

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        credential: AsyncTokenCredential,
        base_url: str = GRAPH_BASE_URL,
    ) -> None:
        """
        Initialize fetcher.

        Args:
            http_client: Shared async HTTP client (redirects must be followed)
            credential: App-only credential for the Graph scope
            base_url: Graph API root
        """
        self._http = http_client
        self._credential = credential
        self._base_url = base_url.rstrip("/")

    async def fetch(
        self,
        doc: DocumentReference,
        privilege: FetchPrivilege = FetchPrivilege.MOST,
    ) -> bytes:
        """
        Download the full content of a document.

        Args:
            doc: Document reference (drive_id, item_id, name and url required)
            privilege: Permission model to use

        Returns:
            bytes: Document content

        Raises:
            InvalidReferenceError: When a required field is empty (no remote call)
            FetchFailedError: On any transport, auth or HTTP error
        """
        for field in REQUIRED_FIELDS:
            if not getattr(doc, field):
                raise InvalidReferenceError(
                    f"Document reference is missing '{field}'",
                    field=field,
                    details={"url": doc.url},
                )

        logger.info(
            f"Downloading {doc.name} from SharePoint",
            extra={**document_context(doc), "privilege": privilege.value},
        )

        try:
            headers = await self._auth_headers()
            if privilege is FetchPrivilege.LEAST:
                site_id = await self._resolve_site_id(doc.url, headers)
                content_url = (
                    f"{self._base_url}/sites/{site_id}"
                    f"/drives/{doc.drive_id}/items/{doc.item_id}/content"
                )
            else:
                content_url = f"{self._base_url}/drives/{doc.drive_id}/items/{doc.item_id}/content"

            response = await self._http.get(content_url, headers=headers)
            response.raise_for_status()
        except InvalidReferenceError:
            raise
        except Exception as e:
            logger.error(
                f"Unable to download {doc.name} from SharePoint",
                extra={**document_context(doc), "error_type": type(e).__name__, "error_msg": str(e)},
            )
            raise FetchFailedError(
                f"Unable to download {doc.name} from SharePoint: {e}",
                url=doc.url,
            ) from e

        content = response.content
        logger.info(
            f"Downloaded {doc.name}",
            extra={**document_context(doc), "byte_count": len(content)},
        )
        return content

    async def _auth_headers(self) -> dict[str, str]:
        token = await self._credential.get_token(GRAPH_SCOPE)
        return {"Authorization": f"Bearer {token.token}"}

    async def _resolve_site_id(self, url: str, headers: dict[str, str]) -> str:
        host, site_path = site_path_from_url(url)
        response = await self._http.get(
            f"{self._base_url}/sites/{host}:/{quote(site_path)}",
            headers=headers,
        )
        response.raise_for_status()
        site_id = response.json().get("id")
        if not site_id:
            raise FetchFailedError("Graph returned a site without an id", url=url)
        return site_id
