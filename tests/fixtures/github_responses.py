"""Mock GitHub API response fixtures.

These fixtures represent realistic GitHub REST API responses for testing
payload parsing. Structure matches the GitHub REST API v3; fields the
connector ignores are kept so that `extra="ignore"` is exercised.

See: https://docs.github.com/en/rest/repos/repos
     https://docs.github.com/en/rest/commits/commits
"""

from tests.conftest import JAN_15_ISO, JAN_16_ISO

# -----------------------------------------------------------------------------
# User Response (GET /user)
# -----------------------------------------------------------------------------
GITHUB_USER_RESPONSE = {
    "login": "octocat",
    "id": 583231,
    "node_id": "MDQ6VXNlcjU4MzIzMQ==",
    "type": "User",
    "site_admin": False,
    "name": "The Octocat",
}

# -----------------------------------------------------------------------------
# Repository Listing (GET /users/{owner}/repos)
# -----------------------------------------------------------------------------
GITHUB_REPOS_RESPONSE = [
    {
        "id": 1296269,
        "node_id": "MDEwOlJlcG9zaXRvcnkxMjk2MjY5",
        "name": "Hello-World",
        "full_name": "octocat/Hello-World",
        "owner": {"login": "octocat", "id": 583231, "type": "User"},
        "private": False,
        "fork": False,
        "default_branch": "master",
        "pushed_at": "2024-01-16T14:00:00Z",
    },
    {
        "id": 132935648,
        "name": "boysenberry-repo-1",
        "full_name": "octocat/boysenberry-repo-1",
        "owner": {"login": "octocat", "id": 583231, "type": "User"},
        "private": False,
        "fork": True,
    },
]

# -----------------------------------------------------------------------------
# Commit Listing (GET /repos/{owner}/{repo}/commits)
# -----------------------------------------------------------------------------
GITHUB_COMMITS_RESPONSE = [
    {
        "sha": "7fd1a60b01f91b314f59955a4e4d4e80d8edf11d",
        "commit": {
            "author": {
                "name": "The Octocat",
                "email": "octocat@nowhere.com",
                "date": JAN_16_ISO,
            },
            "committer": {
                "name": "The Octocat",
                "email": "octocat@nowhere.com",
                "date": JAN_16_ISO,
            },
            "message": "Merge pull request #6 from Spaceghost/patch-1\n\nNew line at end of file.",
            "comment_count": 0,
        },
        "author": {"login": "octocat", "id": 583231},
        "parents": [{"sha": "553c2077f0edc3d5dc5d17262f6aa498e69d6f8e"}],
    },
    {
        "sha": "762941318ee16e59dabbacb1b4049eec22f0d303",
        "commit": {
            "author": {
                "name": "Johnneylee Jack Rollins",
                "email": "johnneylee.rollins@gmail.com",
                "date": JAN_15_ISO,
            },
            "committer": {
                "name": "Johnneylee Jack Rollins",
                "email": "johnneylee.rollins@gmail.com",
                "date": JAN_15_ISO,
            },
            "message": "New line at end of file. --Signed off by Spaceghost",
            "comment_count": 0,
        },
        "author": None,
        "parents": [],
    },
]

# A commit whose author object is missing (should be skipped, not fail the page)
GITHUB_COMMIT_WITHOUT_AUTHOR = {
    "sha": "deadbeef",
    "commit": {"message": "orphan", "committer": {"name": "x", "date": JAN_15_ISO}},
}
