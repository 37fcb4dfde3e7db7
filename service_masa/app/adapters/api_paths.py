"""
Masa API paths.
"""

SEARCH_LIVE_TWITTER = "/api/v1/search/live/twitter"
SEARCH_LIVE_TWITTER_STATUS = "/api/v1/search/live/twitter/status/{id}"
SEARCH_LIVE_TWITTER_RESULT = "/api/v1/search/live/twitter/result/{id}"
SEARCH_LIVE_WEB_SCRAPE = "/api/v1/search/live/web/scrape"
SEARCH_EXTRACTION = "/api/v1/search/extraction"
SEARCH_ANALYSIS = "/api/v1/search/analysis"
SEARCH_SIMILARITY_TWITTER = "/api/v1/search/similarity/twitter"
