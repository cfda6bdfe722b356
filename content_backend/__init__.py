"""
Content storage backend for the NOARZ static site.

Site content (news items, site settings, social links, admin code) is kept
as JSON files in a GitHub repository when the GitHub API is configured and
reachable, and in a local key-value store otherwise.
"""
