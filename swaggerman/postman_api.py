from typing import Optional

import requests

from .exceptions import HttpError
from . import logger

POSTMAN_BASE_URL = 'https://api.getpostman.com'


class PostmanClient:
    """Minimal Postman API client: look resources up by name and upsert them.

    No retries are attempted; every failed call raises :class:`HttpError`.
    """

    def __init__(self, api_key: str, base_url: str = POSTMAN_BASE_URL, session=None):
        self.base_url = base_url.rstrip('/')
        self.session = session or requests.Session()
        self.session.headers.update({'X-Api-Key': api_key})

    @classmethod
    def from_settings(cls, settings):
        return cls(settings.api_key, base_url=settings.postman_base_url)

    def _request(self, method: str, url: str, **kwargs) -> requests.Response:
        logger.debug(f"{method.upper()} {url}")
        try:
            response = self.session.request(method, url, **kwargs)
            response.raise_for_status()
        except requests.HTTPError as e:
            status_code = e.response.status_code if e.response is not None else None
            raise HttpError(
                f"{method.upper()} {url} failed: {e}", status_code=status_code,
            ) from e
        except requests.RequestException as e:
            raise HttpError(f"{method.upper()} {url} failed: {e}") from e
        return response

    def find_uid(self, resource: str, name: str) -> Optional[str]:
        url = f'{self.base_url}/{resource}'
        response = self._request('get', url)
        try:
            items = response.json().get(resource) or []
        except ValueError as e:
            raise HttpError(f"GET {url} returned invalid JSON: {e}") from e
        for item in items:
            if item.get('name') == name:
                return item.get('uid')
        return None

    def create_or_update(self, resource: str, uid: Optional[str], payload: dict):
        url = f'{self.base_url}/{resource}{f"/{uid}" if uid else ""}'
        method = 'put' if uid else 'post'
        return self._request(method, url, json=payload)

    def publish(self, resource: str, name: str, payload: dict):
        uid = self.find_uid(resource, name)
        logger.info(
            f"{'Updating' if uid else 'Creating'} {resource} {name!r}"
        )
        return self.create_or_update(resource, uid, payload)
