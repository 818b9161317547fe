# Import order is run order.
from .grant_ctr_minimum import GRANT_CTR_MINIMUM
from .grant_sitelinks_minimum import GRANT_SITELINKS_MINIMUM
from .grant_geo_targeting import GRANT_GEO_TARGETING
from .grant_campaign_structure import GRANT_CAMPAIGN_STRUCTURE
from .grant_keyword_quality import GRANT_KEYWORD_QUALITY
from .grant_link_liveness import GRANT_LINK_LIVENESS

__all__ = [
    "GRANT_CTR_MINIMUM",
    "GRANT_SITELINKS_MINIMUM",
    "GRANT_GEO_TARGETING",
    "GRANT_CAMPAIGN_STRUCTURE",
    "GRANT_KEYWORD_QUALITY",
    "GRANT_LINK_LIVENESS",
]
