"""
User-facing message text.

These strings are spoken back to the user, so they are data: the resolver
and the tests match on them, and the HTTP layer passes them through as-is.
"""

EMPTY_QUERY = "Please provide a search query."

MISSING_CREDENTIAL = "{provider} API key is missing. Please configure it in environment variables."

QUERY_REJECTED = "Query error: {message}. Please try a different search term."
CREDENTIAL_DENIED = "API key invalid or access denied. Please check your {provider} API key."
RATE_LIMITED = "Too many requests. Please wait a moment and try again."
PROVIDER_ERROR = "{provider} API error ({code}): {message}"

NO_RESULTS = 'No results found for "{query}". Try using different keywords.'
NO_REAL_TIME_RESULTS = (
    'No real-time results found for "{query}". '
    "The topic may not have recent coverage or try using different keywords."
)
NO_RECENT_NEWS = (
    'No recent news found for "{query}". '
    "The topic may not have recent coverage or try using different keywords."
)

NETWORK_ERROR = "Network error. Please check your internet connection and try again."
SEARCH_FAILED = "Search failed: {reason}. Please try again."
QUICK_SEARCH_FAILED = "Search failed. Please try again."

APOLOGY = (
    "I'm sorry, I couldn't find or process information for that query. "
    "Would you like to try asking something else?"
)

# Substrings identifying a message that must be returned verbatim, never condensed.
FAILURE_SENTINELS = (
    "No results found",
    "No real-time results found",
    "No recent news found",
    "Search failed",
)


def missing_credential(provider: str) -> str:
    return MISSING_CREDENTIAL.format(provider=provider)


def no_results(query: str) -> str:
    return NO_RESULTS.format(query=query)


def no_real_time_results(query: str) -> str:
    return NO_REAL_TIME_RESULTS.format(query=query)


def no_recent_news(query: str) -> str:
    return NO_RECENT_NEWS.format(query=query)


def search_failed(reason: str) -> str:
    return SEARCH_FAILED.format(reason=reason or "Unknown error")


def is_failure_sentinel(content: str) -> bool:
    return any(sentinel in content for sentinel in FAILURE_SENTINELS)
