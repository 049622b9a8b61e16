from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import requests

from delta_common.errors import ApiError
from delta_common.schema import WeaponCode

LOGGER = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30


class ApiClient:
    """Client for a remote service publishing the same weapon-code records."""

    def __init__(self, base_url: str, timeout: float = DEFAULT_TIMEOUT, session: Optional[requests.Session] = None) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def fetch_weapon_codes(self, mode: Optional[str] = None) -> List[WeaponCode]:
        """
        GET ``/api/weapon-codes`` (optionally ``?mode=<mode>``).

        The service answers ``{"success", "version", "last_updated", "data", "message"}``.
        Transport errors, non-200 responses, undecodable bodies and
        ``success: false`` all raise ApiError.
        """

        url = f"{self.base_url}/api/weapon-codes"
        params = {"mode": mode} if mode else None
        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
        except requests.RequestException as exc:
            raise ApiError(f"Failed to fetch from API: {exc}") from exc

        if response.status_code != 200:
            raise ApiError(f"API returned status {response.status_code}: {response.text}")

        try:
            payload: Dict[str, Any] = response.json()
        except ValueError as exc:
            raise ApiError(f"Failed to parse API response: {exc}") from exc

        if not isinstance(payload, dict):
            raise ApiError("API response must be a JSON object.")
        if not payload.get("success"):
            raise ApiError(f"API error: {payload.get('message', '')}")

        try:
            codes = [WeaponCode.from_dict(item) for item in payload.get("data") or []]
        except (TypeError, ValueError, AttributeError) as exc:
            raise ApiError(f"Invalid weapon code in API response: {exc}") from exc

        LOGGER.info("Fetched %d weapon codes from API (version: %s)", len(codes), payload.get("version"))
        return codes
