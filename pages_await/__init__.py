"""Wait for a Cloudflare Pages deployment and mirror its status to GitHub and Slack."""

__version__ = "1.0.0"
