# Supabase REST/RPC client
import logging
import requests

from models.errors import ErrorKind, SalonApiError

logger = logging.getLogger(__name__)

STATUS_KINDS = {
    404: ErrorKind.NOT_FOUND,
    409: ErrorKind.CONFLICT,
}


class SupabaseClient:
    """Direct HTTP access to the PostgREST interface of a Supabase project."""

    def __init__(self, url, key, timeout=10, session=None):
        self.base_url = (url or '').rstrip('/')
        self.timeout = timeout
        self.headers = {
            'apikey': key or '',
            'Authorization': f'Bearer {key or ""}',
            'Content-Type': 'application/json'
        }
        self.session = session or requests.Session()

    def select(self, table, params):
        return self._request('GET', f'/rest/v1/{table}', params=params) or []

    def rpc(self, fn_name, payload):
        return self._request('POST', f'/rest/v1/rpc/{fn_name}', json=payload)

    def update(self, table, filters, values):
        return self._request(
            'PATCH',
            f'/rest/v1/{table}',
            params=filters,
            json=values,
            extra_headers={'Prefer': 'return=representation'}
        ) or []

    def _request(self, method, path, params=None, json=None, extra_headers=None):
        headers = dict(self.headers)
        if extra_headers:
            headers.update(extra_headers)
        url = f'{self.base_url}{path}'

        try:
            response = self.session.request(
                method,
                url,
                params=params,
                json=json,
                headers=headers,
                timeout=self.timeout
            )
        except requests.exceptions.Timeout:
            logger.warning('Supabase timeout: %s %s', method, path)
            raise SalonApiError(ErrorKind.BACKEND_ERROR, 'Supabase request timed out')
        except requests.exceptions.RequestException as e:
            logger.warning('Supabase request error: %s %s: %s', method, path, e)
            raise SalonApiError(ErrorKind.BACKEND_ERROR, str(e) or 'Supabase request failed')

        return self._parse_response(response, method, path)

    @staticmethod
    def _parse_response(response, method, path):
        if not response.ok:
            text = response.text
            logger.warning('Supabase %s %s -> %s %s', method, path, response.status_code, text)
            kind = STATUS_KINDS.get(response.status_code, ErrorKind.BACKEND_ERROR)
            raise SalonApiError(
                kind,
                text or f'Supabase request failed: {response.status_code}',
                status_code=response.status_code
            )

        if response.status_code == 204 or not response.content:
            return None

        return response.json()
