"""View layer for rendering the homepage (HTML)."""

from __future__ import annotations

import html
from typing import Iterable, Sequence

from .models.records import Repo, Tweet

TWEETS_FALLBACK = "Nothing too much, probably twitter is failing :)"
REPOS_FALLBACK = "No repositories to show."


def link(href: str, text: str, css_class: str | None = None) -> str:
    attrs = f'href="{html.escape(href, quote=True)}"'
    if css_class:
        attrs += f' class="{html.escape(css_class, quote=True)}"'
    return f"<a {attrs}>{html.escape(text)}</a>"


def render_tweets(tweets: Sequence[Tweet], screen_name: str, limit: int = 5) -> str:
    profile = f"https://twitter.com/{screen_name}"
    lines = [
        '<div class="twitter">',
        f"<h1>What I&#39;ve got to say {link(profile, '@' + screen_name)}</h1>",
        '<div id="twitter">',
    ]
    shown = list(tweets)[: max(limit, 0)]
    if shown:
        lines.append("<ul>")
        for tweet in shown:
            href = f"{profile}/status/{tweet.id}"
            lines.append(f"<li>{link(href, tweet.text)}</li>")
        lines.append("</ul>")
    else:
        lines.append(f"<p>{html.escape(TWEETS_FALLBACK)}</p>")
    lines.extend(["</div>", "</div>"])
    return "\n".join(lines)


def render_repos(repos: Sequence[Repo], user: str, featured: Iterable[str] = ()) -> str:
    featured_names = set(featured)
    profile = f"https://github.com/{user}"
    lines = [
        '<div class="github">',
        f"<h1>{link(profile, f'github.com/{user}')}</h1>",
        '<div id="github">',
    ]
    if repos:
        lines.append("<ul>")
        for repo in repos:
            css = "featured" if repo.name in featured_names else None
            lines.append(f"<li>{link(repo.url, repo.name, css)}</li>")
        lines.append("</ul>")
    else:
        lines.append(f"<p>{html.escape(REPOS_FALLBACK)}</p>")
    lines.extend(["</div>", "</div>"])
    return "\n".join(lines)


def render_page(
    tweets: Sequence[Tweet],
    repos: Sequence[Repo],
    screen_name: str,
    github_user: str,
    featured: Iterable[str] = (),
    tweets_limit: int = 5,
    title: str = "Homepage",
) -> str:
    body = "\n".join(
        [
            render_tweets(tweets, screen_name, tweets_limit),
            render_repos(repos, github_user, featured),
        ]
    )
    return (
        "<!DOCTYPE html>\n"
        '<html lang="en">\n'
        "<head>\n"
        '<meta charset="utf-8">\n'
        f"<title>{html.escape(title)}</title>\n"
        "</head>\n"
        "<body>\n"
        f"{body}\n"
        "</body>\n"
        "</html>\n"
    )
