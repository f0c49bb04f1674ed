import logging

from flask import Flask, request, jsonify, abort
from flask_cors import CORS
from werkzeug.exceptions import HTTPException

from backend.config import Settings, get_settings, setup_logging
from backend.services.graph import build_graph, graph_to_tree
from backend.services.ranking import filter_ranked, histogram_data, rank_keywords
from backend.services.scraper import fetch_article, scrape_rows
from backend.services.selection import KeywordSelection, relevant_articles
from backend.services.summarize import SummarizeError, summarize
from backend.services.text import as_articles, compute_tf_df
from backend.utils.loader import column_options, guess_title_key, guess_url_key, load_rows

logger = logging.getLogger(__name__)


def _json_body():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        abort(400, description="Expected a JSON object body")
    return data


def _list_field(data, name, required=True):
    value = data.get(name)
    if value is None and not required:
        return []
    if not isinstance(value, list):
        abort(400, description=f"'{name}' must be a list")
    return value


def _articles_field(data):
    """Posted articles as records; an id used twice is a client bug."""
    raw = _list_field(data, "articles")
    seen = set()
    for a in raw:
        aid = a.get("id") if isinstance(a, dict) else None
        if aid in (None, ""):
            continue
        if str(aid) in seen:
            abort(400, description=f"Duplicate article id {aid!r}")
        seen.add(str(aid))
    return as_articles(raw)


def _max_terms(data, settings: Settings):
    raw = data.get("max_terms", settings.max_terms)
    try:
        n = int(raw)
    except (TypeError, ValueError):
        abort(400, description="'max_terms' must be an integer")
    # keep the table within what the client can render
    return max(0, min(n, settings.max_terms_limit))


def create_app(settings: Settings = None):
    settings = settings or get_settings()
    setup_logging(settings.log_level)

    app = Flask(__name__)
    app.config["SETTINGS"] = settings
    CORS(app)

    @app.errorhandler(HTTPException)
    def handle_http_error(e):
        return jsonify({"ok": False, "error": e.description}), e.code

    @app.errorhandler(Exception)
    def handle_unexpected(e):
        logger.exception("unhandled error on %s", request.path)
        return jsonify({"ok": False, "error": "Internal server error"}), 500

    @app.route('/api/health')
    def health():
        return jsonify({"ok": True})

    @app.route('/api/upload', methods=['POST'])
    def upload_csv():
        """
        Parse an uploaded CSV and guess the title / URL columns
        from its first row.
        """
        upload = request.files.get('file')
        raw = upload.read() if upload else request.get_data()
        if not raw:
            abort(400, description="No CSV data")

        rows = load_rows(raw)
        first = rows[0] if rows else {}
        logger.info("upload: %d rows", len(rows))
        return jsonify({
            "ok": True,
            "rows": rows,
            "columns": column_options(rows),
            "title_col": guess_title_key(first),
            "url_col": guess_url_key(first),
        })

    @app.route('/api/scrape', methods=['POST'])
    def scrape():
        data = _json_body()
        result = fetch_article(data.get('url'), timeout=settings.scrape_timeout)
        return jsonify(result.to_dict()), (200 if result.ok else result.status)

    @app.route('/api/articles', methods=['POST'])
    def articles_from_rows():
        """Scrape every row of an uploaded CSV into articles."""
        data = _json_body()
        rows = _list_field(data, 'rows')
        articles = scrape_rows(
            rows,
            data.get('title_col') or "",
            data.get('url_col') or "",
            concurrency=settings.scrape_concurrency,
            timeout=settings.scrape_timeout,
        )
        return jsonify({"ok": True, "articles": [a.to_dict() for a in articles]})

    @app.route('/api/keywords', methods=['POST'])
    def keywords():
        """
        TF-IDF keyword ranking for the posted articles.
        Optional 'query' filters the table by substring; the histogram
        follows the filtered view.
        """
        data = _json_body()
        articles = _articles_field(data)
        ranked = rank_keywords(articles, _max_terms(data, settings))
        shown = filter_ranked(ranked, data.get('query'))
        return jsonify({
            "ok": True,
            "keywords": [s.to_dict() for s in shown],
            "histogram": histogram_data(shown),
        })

    @app.route('/api/graph', methods=['POST'])
    def graph():
        data = _json_body()
        articles = _articles_field(data)
        selected = KeywordSelection(_list_field(data, 'selected', required=False)).terms

        doc_tfs, _ = compute_tf_df(articles)
        g = build_graph(articles, selected, doc_tfs)
        relevant = relevant_articles(articles, selected, doc_tfs)
        logger.info("graph: %d nodes, %d links", len(g.nodes), len(g.links))
        return jsonify({
            "ok": True,
            "graph": g.to_dict(),
            "tree": graph_to_tree(g),
            "relevant": [a.id for a in relevant],
        })

    @app.route('/api/summarize', methods=['POST'])
    def summarize_articles():
        data = _json_body()
        try:
            summary = summarize(
                _list_field(data, 'items', required=False),
                _list_field(data, 'keywords', required=False),
                data.get('prompt'),
                history=_list_field(data, 'history', required=False),
                model=data.get('model') or settings.openai_model,
                api_key=settings.openai_api_key,
            )
        except SummarizeError as e:
            return jsonify({"ok": False, "error": str(e)}), e.status
        return jsonify({"ok": True, "summary": summary})

    return app


if __name__ == "__main__":
    settings = get_settings()
    create_app(settings).run(host="0.0.0.0", port=settings.port)
