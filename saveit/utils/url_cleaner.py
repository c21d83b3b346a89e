"""
Tracking-parameter removal for saved URLs.

Parameter names are matched case-sensitively; everything else in the URL
(scheme, userinfo, port, path, fragment, other parameters and their order)
is kept.
"""

from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit
import logging

logger = logging.getLogger(__name__)

TRACKING_PARAMS = frozenset([
    # Google Analytics / Ads
    'utm_source', 'utm_medium', 'utm_campaign', 'utm_term', 'utm_content',
    'utm_id', 'utm_name', 'utm_reader', 'utm_social', 'utm_social-type',
    'gclid', 'gclsrc', 'dclid', 'gbraid', 'wbraid', '_ga', '_gl',
    # Facebook
    'fbclid', 'fb_action_ids', 'fb_action_types', 'fb_ref', 'fb_source',
    # Instagram
    'igshid', 'igsh',
    # Twitter / X
    'ref_src', 'ref_url', 'twclid',
    # LinkedIn
    'li_source', 'li_medium', 'trk', 'trkCampaign',
    # Email marketing
    'mc_cid', 'mc_eid', 'ck_subscriber_id', '_hsenc', '_hsmi', 'mkt_tok',
    # Microsoft
    'msclkid', 'ms_c',
    # TikTok
    'tt_medium', 'tt_content', 'ttclid',
    # Pinterest
    'epik',
    # YouTube
    'feature', 'kw',
    # Generic
    'ref', 'source', 'campaign', 'medium',
    # Affiliates
    'affiliate_id', 'partner_id', 'click_id',
    # Short ids
    'cid', 'sid', 'tid', 'pid', 'aid',
])


def clean_url(url: str) -> str:
    """
    Remove known tracking parameters from a URL.

    Returns the input unchanged when it is not an absolute URL.
    """
    try:
        parts = urlsplit(url)
        if not parts.scheme or not (parts.netloc or parts.scheme == 'file' or parts.path):
            raise ValueError('URL must be absolute')
        if parts.scheme in ('http', 'https') and not parts.netloc:
            raise ValueError('URL has no host')
    except ValueError as e:
        logger.warning(f"Failed to clean URL: {url!r} ({e})")
        return url

    if not parts.query:
        return url

    kept = [
        (name, value)
        for name, value in parse_qsl(parts.query, keep_blank_values=True)
        if name not in TRACKING_PARAMS
    ]
    return urlunsplit((
        parts.scheme,
        parts.netloc,
        parts.path,
        urlencode(kept),
        parts.fragment,
    ))
