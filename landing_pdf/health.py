import sys

import requests

PROBE_TIMEOUT_S = 10


class SiteUnavailableError(RuntimeError):
    pass


def check_site_health(url: str, timeout: float = PROBE_TIMEOUT_S, verify: bool = True) -> bool:
    """
    Single GET against url before any browser is launched.

    True only for a 2xx/3xx answer within `timeout` seconds. Redirects are not
    followed; a 3xx already means the site is up. Never retries.
    """
    try:
        resp = requests.get(url, timeout=timeout, allow_redirects=False, stream=True, verify=verify)
    except requests.Timeout:
        print(f"Request timed out after {timeout:g} seconds", file=sys.stderr)
        return False
    except requests.RequestException as e:
        print(f"Failed to connect to the site: {e}", file=sys.stderr)
        return False

    # body is never read
    resp.close()
    if 200 <= resp.status_code < 400:
        print(f"Site is up and running. Status code: {resp.status_code}")
        return True
    print(f"Site returned error status code: {resp.status_code}", file=sys.stderr)
    return False
