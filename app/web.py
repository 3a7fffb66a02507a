"""HTML page rendering for the interactive catalog browser."""

from __future__ import annotations

import json
from html import escape
from textwrap import dedent

from .config import Settings


PAGE_TEMPLATE = dedent(
    """
<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="utf-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1" />
    <title>__APP_NAME__</title>
    <style>
        :root {
            font-family: 'Inter', 'Segoe UI', system-ui, -apple-system, sans-serif;
            --surface: #ffffff;
            --surface-muted: #f3f4f6;
            --text-primary: #374151;
            --text-muted: #6b7280;
            --accent: #3b82f6;
            --positive: #22c55e;
            --negative: #ef4444;
            --disabled: #6b7280;
            color: var(--text-primary);
        }
        * {
            box-sizing: border-box;
        }
        body {
            margin: 0;
        }
        main {
            max-width: 1200px;
            margin: 0 auto;
            padding: 1rem;
        }
        h1, h2 {
            text-align: center;
        }
        .categories, .search {
            display: flex;
            justify-content: center;
            margin-bottom: 1.5rem;
        }
        .categories button {
            margin: 0 0.25rem;
            padding: 0.5rem 1rem;
            border: none;
            border-radius: 0.25rem;
            background: var(--surface-muted);
            cursor: pointer;
        }
        .categories button.active {
            background: var(--accent);
            color: #ffffff;
        }
        .search input {
            width: 100%;
            max-width: 20rem;
            padding: 0.5rem;
            border: 1px solid var(--surface-muted);
            border-radius: 0.25rem;
        }
        .grid {
            display: grid;
            grid-template-columns: repeat(auto-fill, minmax(240px, 1fr));
            gap: 1rem;
        }
        .card {
            border: 1px solid var(--surface-muted);
            border-radius: 0.25rem;
            padding: 1rem;
            cursor: pointer;
            box-shadow: 0 1px 3px rgba(0, 0, 0, 0.1);
        }
        .card img, .overlay img {
            width: 100%;
            height: 16rem;
            object-fit: cover;
            border-radius: 0.25rem;
        }
        .meta {
            color: var(--text-muted);
            font-size: 0.75rem;
        }
        .actions button {
            border: none;
            border-radius: 0.25rem;
            padding: 0.25rem 0.5rem;
            color: #ffffff;
            font-size: 0.75rem;
            cursor: pointer;
        }
        .actions .add {
            background: var(--positive);
        }
        .actions .added {
            background: var(--disabled);
            cursor: not-allowed;
        }
        .actions .remove {
            background: var(--negative);
        }
        .spinner {
            margin: 2rem auto;
            width: 3rem;
            height: 3rem;
            border-radius: 50%;
            border-bottom: 2px solid #111827;
            animation: spin 1s linear infinite;
        }
        @keyframes spin {
            to {
                transform: rotate(360deg);
            }
        }
        .overlay {
            position: fixed;
            inset: 0;
            display: flex;
            align-items: center;
            justify-content: center;
            background: rgba(0, 0, 0, 0.5);
        }
        .overlay .panel {
            position: relative;
            background: var(--surface);
            padding: 1rem;
            border-radius: 0.25rem;
            width: 100%;
            max-width: 28rem;
            margin: 0 1rem;
        }
        .overlay .close {
            position: absolute;
            top: 0.5rem;
            right: 0.5rem;
            border: none;
            background: none;
            font-size: 1.25rem;
            cursor: pointer;
        }
        [hidden] {
            display: none !important;
        }
    </style>
</head>
<body>
<main>
    <h1>__APP_NAME__</h1>
    <div class="categories" id="categories"></div>
    <div class="search">
        <input id="search" type="text" placeholder="Search..." />
    </div>
    <div class="spinner" id="spinner"></div>
    <div class="grid" id="catalog"></div>
    <p id="catalog-empty" hidden>No movies found.</p>

    <section id="watchlist-section" hidden>
        <h2>Watchlist</h2>
        <div class="search">
            <input id="watchlist-search" type="text" placeholder="Search Watchlist..." />
        </div>
        <div class="grid" id="watchlist"></div>
        <p id="watchlist-empty" hidden>No movies in watchlist found.</p>
    </section>
</main>
<div class="overlay" id="overlay" hidden>
    <div class="panel" id="overlay-panel"></div>
</div>
<script>
    const DEFAULTS = __DEFAULTS_JSON__;
    let state = null;
    let pollTimer = null;

    function truncate(text, maxLength) {
        return text.length > maxLength ? `${text.substring(0, maxLength)}...` : text;
    }

    function el(tag, attrs = {}, children = []) {
        const node = document.createElement(tag);
        for (const [key, value] of Object.entries(attrs)) {
            if (key === 'onclick') {
                node.addEventListener('click', value);
            } else if (key === 'text') {
                node.textContent = value;
            } else {
                node.setAttribute(key, value);
            }
        }
        children.forEach((child) => node.appendChild(child));
        return node;
    }

    async function call(method, path, body) {
        const options = { method, headers: {} };
        if (body !== undefined) {
            options.headers['Content-Type'] = 'application/json';
            options.body = JSON.stringify(body);
        }
        const response = await fetch(path, options);
        if (response.ok) {
            render(await response.json());
        }
    }

    function inWatchlist(movieId) {
        return state.watchlist_ids.includes(movieId);
    }

    function movieDetails(movie, description) {
        return [
            el('img', { src: movie.image, alt: movie.title }),
            el('h2', { text: movie.title }),
            el('p', { text: description }),
            el('p', { class: 'meta', text: `Release Date: ${movie.release_date}` }),
            el('p', { text: `Rating: ★ ${movie.rating}` }),
        ];
    }

    function addButton(movie) {
        const added = inWatchlist(movie.id);
        const button = el('button', {
            class: added ? 'added' : 'add',
            text: added ? 'In Watchlist' : 'Add to Watchlist',
            onclick: (event) => {
                event.stopPropagation();
                call('POST', `/api/watchlist/${movie.id}`);
            },
        });
        button.disabled = added;
        return button;
    }

    function removeButton(movie) {
        return el('button', {
            class: 'remove',
            text: 'Remove from Watchlist',
            onclick: (event) => {
                event.stopPropagation();
                call('DELETE', `/api/watchlist/${movie.id}`);
            },
        });
    }

    function card(movie, action) {
        const description = truncate(movie.description, DEFAULTS.descriptionPreviewLength);
        return el(
            'div',
            { class: 'card', onclick: () => call('POST', `/api/selection/${movie.id}`) },
            [...movieDetails(movie, description), el('div', { class: 'actions' }, [action(movie)])],
        );
    }

    function render(next) {
        state = next;
        const categories = document.getElementById('categories');
        categories.replaceChildren(
            ...state.categories.map((category) =>
                el('button', {
                    class: category === state.category ? 'active' : '',
                    text: category.charAt(0).toUpperCase() + category.slice(1),
                    onclick: () => call('POST', '/api/category', { category }),
                }),
            ),
        );

        document.getElementById('spinner').hidden = !state.catalog.is_loading;
        document.getElementById('catalog').replaceChildren(
            ...state.catalog.movies.map((movie) => card(movie, addButton)),
        );
        document.getElementById('catalog-empty').hidden = !state.catalog.no_results;

        document.getElementById('watchlist-section').hidden = state.watchlist_ids.length === 0;
        document.getElementById('watchlist').replaceChildren(
            ...state.watchlist.movies.map((movie) => card(movie, removeButton)),
        );
        document.getElementById('watchlist-empty').hidden = !state.watchlist.no_results;

        const overlay = document.getElementById('overlay');
        const selected = state.selection.is_open ? state.selection.movie : null;
        overlay.hidden = selected === null;
        if (selected !== null) {
            document.getElementById('overlay-panel').replaceChildren(
                el('button', { class: 'close', text: '×', onclick: () => call('DELETE', '/api/selection') }),
                ...movieDetails(selected, selected.description),
                el('div', { class: 'actions' }, [addButton(selected), removeButton(selected)]),
            );
        }

        if (state.catalog.is_loading && pollTimer === null) {
            pollTimer = setTimeout(() => {
                pollTimer = null;
                call('GET', '/api/state');
            }, 1000);
        }
    }

    document.getElementById('search').addEventListener('input', (event) => {
        call('POST', '/api/search', { term: event.target.value });
    });
    document.getElementById('watchlist-search').addEventListener('input', (event) => {
        call('POST', '/api/watchlist/search', { term: event.target.value });
    });

    call('GET', '/api/state');
</script>
</body>
</html>
"""
)


def render_page(settings: Settings) -> str:
    """Return the full HTML for the catalog browser."""

    defaults = {
        "appName": settings.app_name,
        "descriptionPreviewLength": settings.description_preview_length,
    }
    defaults_json = json.dumps(defaults).replace("</", "<\\/")

    html = PAGE_TEMPLATE
    replacements = {
        "__APP_NAME__": escape(settings.app_name),
        "__DEFAULTS_JSON__": defaults_json,
    }
    for placeholder, value in replacements.items():
        html = html.replace(placeholder, value)
    return html
