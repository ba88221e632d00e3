import json
import re

PAYLOAD_RE = re.compile(r'<script id="popup-notifications-config"[^>]*>(.*?)</script>', re.S)


def extract_payload(html):
    match = PAYLOAD_RE.search(html)
    if match is None:
        return None
    return json.loads(match.group(1))


def block_ids(html):
    return re.findall(r'class="popup-notification" data-id="([^"]+)"', html)
