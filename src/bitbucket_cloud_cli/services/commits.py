import httpx

from bitbucket_cloud_cli.models.bitbucket import (
    CommitComment,
    CommitCommentRequest,
    CommitComments,
    CommitParticipant,
)
from bitbucket_cloud_cli.models.options import FilterSortOptions, QueryOptions
from bitbucket_cloud_cli.services.bitbucket_client import Service

APPROVE_PATH = "/repositories/%s/%s/commit/%s/approve"
COMMENTS_PATH = "/repositories/%s/%s/commit/%s/comments"


class CommitService(Service):
    def approve(
        self, owner: str, repo_slug: str, sha: str, options: QueryOptions | None = None
    ) -> tuple[CommitParticipant, httpx.Response]:
        """Approve a commit as the authenticated user.

        Only users with explicit access to the repository may approve; a public
        repository is not enough. The server enforces this.
        """
        url = self.client.add_options(self.client.request_url(APPROVE_PATH, owner, repo_slug, sha), options)
        return self.client.execute("POST", url, CommitParticipant)

    def unapprove(self, owner: str, repo_slug: str, sha: str) -> httpx.Response:
        """Withdraw the authenticated user's approval of a commit."""
        url = self.client.request_url(APPROVE_PATH, owner, repo_slug, sha)
        _, response = self.client.execute("DELETE", url)
        return response

    def list_comments(
        self, owner: str, repo_slug: str, sha: str, options: FilterSortOptions | None = None
    ) -> tuple[CommitComments, httpx.Response]:
        """List global and inline comments, oldest first unless ``options.sort`` says otherwise."""
        url = self.client.add_options(self.client.request_url(COMMENTS_PATH, owner, repo_slug, sha), options)
        return self.client.execute("GET", url, CommitComments)

    def create_comment(
        self,
        owner: str,
        repo_slug: str,
        sha: str,
        payload: CommitCommentRequest,
        options: QueryOptions | None = None,
    ) -> tuple[CommitComment, httpx.Response]:
        url = self.client.add_options(self.client.request_url(COMMENTS_PATH, owner, repo_slug, sha), options)
        return self.client.execute("POST", url, CommitComment, payload)

    def get_comment(
        self, owner: str, repo_slug: str, sha: str, comment_id: int, options: QueryOptions | None = None
    ) -> tuple[CommitComment, httpx.Response]:
        url = self.client.add_options(
            self.client.request_url(COMMENTS_PATH + "/%s", owner, repo_slug, sha, comment_id), options
        )
        return self.client.execute("GET", url, CommitComment)
