# ==============================================
# PocketBaseClient
# ==============================================
#
# PURPOSE:
#   Manages the HTTP session with a PocketBase server and all the
#   administrative calls the importer needs: superuser login,
#   collection creation and batched record creation.
#
# CLASS: PocketBaseClient
# -----------------------
#   Stateful: holds a requests.Session and the auth token.
#
#   Constructor:
#   ------------
#   - __init__(url, admin_email, admin_password, timeout=30.0, session=None)
#       Store connection params. Don't connect yet.
#
#   Methods:
#   --------
#   - connect() / authenticate() -> None
#       POST /api/collections/_superusers/auth-with-password
#
#   - create_collection(name: str, schema: Schema) -> dict
#       POST /api/collections. Fails if the name is taken.
#
#   - send_batch(collection_name: str, rows: list[dict]) -> list[OperationResult]
#       POST /api/batch, one "create record" request per row.
#       Returns one OperationResult per row.
#
#   - close() -> None
#
#   Context Manager:
#   ----------------
#   - __enter__ / __exit__ for `with PocketBaseClient(...) as pb:` usage.
#
# ==============================================

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence

import requests

from pb_import.config import DEFAULT_TIMEOUT_SECONDS, PocketBaseConfig
from pb_import.errors import (
    AuthenticationError,
    BatchWriteError,
    CollectionCreateError,
    CollectionExistsError,
)
from pb_import.inference.schema import Schema

from .field_mapping import build_collection_payload

AUTH_PATH = "/api/collections/_superusers/auth-with-password"
COLLECTIONS_PATH = "/api/collections"
BATCH_PATH = "/api/batch"

# status reported for operations rolled back with a failed batch
ROLLED_BACK_STATUS = 0


@dataclass(frozen=True)
class OperationResult:
    """Outcome of one operation inside a batch request."""
    status: int
    body: Any = None

    @property
    def succeeded(self) -> bool:
        return self.status == 200


def records_path(collection_name: str) -> str:
    return f"{COLLECTIONS_PATH}/{collection_name}/records"


class PocketBaseClient:
    def __init__(
        self,
        url: str,
        admin_email: str,
        admin_password: str,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        session: Optional[requests.Session] = None
    ):
        self.url = url.rstrip("/")
        self.admin_email = admin_email
        self.admin_password = admin_password
        self.timeout = timeout
        self.session = session or requests.Session()
        self.token: Optional[str] = None

    @classmethod
    def from_config(cls, config: PocketBaseConfig) -> "PocketBaseClient":
        return cls(
            url=config.url,
            admin_email=config.admin_email,
            admin_password=config.admin_password,
            timeout=config.timeout_seconds,
        )

    # ======================================
    # Authentication
    # ======================================
    def connect(self) -> None:
        self.authenticate()

    def authenticate(self) -> None:
        """
        Log in as a superuser and keep the token for later requests.

        Raises:
            AuthenticationError: If the server is unreachable or rejects the credentials
        """
        try:
            response = self.session.post(
                self._endpoint(AUTH_PATH),
                json={"identity": self.admin_email, "password": self.admin_password},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise AuthenticationError(f"Could not reach PocketBase at {self.url}: {e}") from e

        if not response.ok:
            raise AuthenticationError(
                f"Superuser login as '{self.admin_email}' failed "
                f"({response.status_code}): {_error_message(response)}"
            )

        body = _json_body(response)
        token = body.get("token") if isinstance(body, dict) else None
        if not token:
            raise AuthenticationError("Superuser login response did not contain a token")

        self.token = token
        self.session.headers["Authorization"] = token

    # ======================================
    # Collections
    # ======================================
    def create_collection(self, name: str, schema: Schema) -> Dict[str, Any]:
        """
        Create a base collection with one field per schema column.

        Args:
            name: Collection name
            schema: Inferred schema

        Returns:
            The created collection as returned by the server

        Raises:
            CollectionExistsError: If a collection with this name exists
            CollectionCreateError: For any other failure
        """
        payload = build_collection_payload(name, schema)
        try:
            response = self.session.post(
                self._endpoint(COLLECTIONS_PATH),
                json=payload,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise CollectionCreateError(f"Could not create collection '{name}': {e}") from e

        if response.ok:
            body = _json_body(response)
            return body if isinstance(body, dict) else payload

        if _is_name_collision(response):
            raise CollectionExistsError(
                f"Collection '{name}' already exists. Choose another name or delete it first."
            )
        raise CollectionCreateError(
            f"Could not create collection '{name}' "
            f"({response.status_code}): {_error_message(response)}"
        )

    # ======================================
    # Records
    # ======================================
    def send_batch(self, collection_name: str, rows: Sequence[Dict[str, Any]]) -> List[OperationResult]:
        """
        Create many records with a single batch request.

        Args:
            collection_name: Target collection
            rows: Typed rows, one "create" operation each (order kept)

        Returns:
            One OperationResult per row

        Raises:
            BatchWriteError: If the batch request itself fails
        """
        url = records_path(collection_name)
        payload = {
            "requests": [
                {"method": "POST", "url": url, "body": row}
                for row in rows
            ]
        }

        try:
            response = self.session.post(
                self._endpoint(BATCH_PATH),
                json=payload,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise BatchWriteError(f"Batch request to '{collection_name}' failed: {e}") from e

        if response.ok:
            return _operation_results(response)

        # A transactional batch that failed on some operations still
        # reports them per request index; nothing was committed.
        failed = _failed_operations(response)
        if failed is not None:
            return [
                failed.get(index, OperationResult(status=ROLLED_BACK_STATUS))
                for index in range(len(rows))
            ]

        raise BatchWriteError(
            f"Batch request to '{collection_name}' was rejected "
            f"({response.status_code}): {_error_message(response)}"
        )

    # ======================================
    # Lifecycle
    # ======================================
    def close(self) -> None:
        self.session.close()
        self.token = None

    def _endpoint(self, path: str) -> str:
        return f"{self.url}{path}"

    def __enter__(self):
        self.connect()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False


# ==============================================
# Response helpers
# ==============================================

def _json_body(response: requests.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return None


def _error_data(body: Any) -> Dict[str, Any]:
    data = body.get("data") if isinstance(body, dict) else None
    return data if isinstance(data, dict) else {}


def _status(raw_status: Any) -> int:
    # a missing or non-numeric status is a failed operation
    if isinstance(raw_status, bool):
        return ROLLED_BACK_STATUS
    try:
        return int(raw_status)
    except (TypeError, ValueError):
        return ROLLED_BACK_STATUS


def _error_message(response: requests.Response) -> str:
    body = _json_body(response)
    if isinstance(body, dict) and body.get("message"):
        message = str(body["message"])
        details = body.get("data")
        if details:
            message = f"{message} {details}"
        return message
    return response.text[:200] or response.reason or "no response body"


def _is_name_collision(response: requests.Response) -> bool:
    name_error = _error_data(_json_body(response)).get("name")
    if not isinstance(name_error, dict):
        return False
    code = str(name_error.get("code", ""))
    return "exists" in code or "unique" in code


def _operation_results(response: requests.Response) -> List[OperationResult]:
    body = _json_body(response)
    if not isinstance(body, list):
        raise BatchWriteError("Batch response is not a list of operation results")
    results = []
    for item in body:
        if not isinstance(item, dict):
            results.append(OperationResult(status=ROLLED_BACK_STATUS, body=item))
            continue
        results.append(OperationResult(status=_status(item.get("status")), body=item.get("body")))
    return results


def _failed_operations(response: requests.Response) -> Optional[Dict[int, OperationResult]]:
    requests_errors = _error_data(_json_body(response)).get("requests")
    if not isinstance(requests_errors, dict):
        return None

    failed: Dict[int, OperationResult] = {}
    for index, error in requests_errors.items():
        if not str(index).isdigit():
            continue
        inner = error.get("response") if isinstance(error, dict) else None
        status = inner.get("status", response.status_code) if isinstance(inner, dict) else response.status_code
        failed[int(index)] = OperationResult(status=_status(status), body=inner or error)
    return failed
