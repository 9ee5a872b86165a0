import argparse
import logging

from flask import Flask, Response, request

from asciistudio.charsets import DEFAULT, PRESETS
from asciistudio.config import DEFAULT_STRETCH, DEFAULT_WIDTH, Config, check_stretch_bounds, check_width_bounds
from asciistudio.converter import image_to_html
from asciistudio.errors import InvalidConfig, InvalidImage, RenderTimeout
from asciistudio.logging_conf import setup_logging
from asciistudio.render import PlaywrightRenderer, Renderer, RenderSettings

log = logging.getLogger(__name__)

MAX_UPLOAD_BYTES = 16 * 1024 * 1024
_TRUTHY = {"1", "true", "yes", "on"}


def _text(body: str, status: int) -> Response:
    return Response(body, status=status, mimetype="text/plain")


def _markup_from_request() -> str:
    """Accept either a raw HTML body or a JSON object with an `html` key."""
    if request.is_json:
        payload = request.get_json(silent=True)
        if isinstance(payload, dict) and isinstance(payload.get("html"), str):
            return payload["html"]
        if isinstance(payload, str):
            return payload
        return ""
    return request.get_data(as_text=True) or ""


def _config_from_form(form) -> Config:
    try:
        width = int(form.get("width", DEFAULT_WIDTH))
        stretch = float(form.get("stretch", DEFAULT_STRETCH))
    except ValueError as exc:
        raise InvalidConfig(f"Invalid number: {exc}") from exc
    charset = form.get("charset")
    if charset is None:
        charset = PRESETS.get(form.get("preset", ""), DEFAULT)
    return Config(
        target_width=check_width_bounds(width),
        stretch_factor=check_stretch_bounds(stretch),
        charset=charset,
        colorize=form.get("colorize", "true").lower() in _TRUTHY,
        luminance=form.get("luminance", "ntsc"),
    )


def create_app(renderer: Renderer | None = None, settings: RenderSettings | None = None) -> Flask:
    app = Flask(__name__)
    app.config["MAX_CONTENT_LENGTH"] = MAX_UPLOAD_BYTES
    renderer = renderer or PlaywrightRenderer(settings or RenderSettings.from_env())

    @app.route("/api/html-to-image", methods=["GET", "HEAD", "PUT", "PATCH", "DELETE", "POST"])
    def html_to_image():
        if request.method != "POST":
            return _text("Use POST", 405)
        markup = _markup_from_request()
        if not markup:
            return _text("Missing html", 400)

        try:
            capture = renderer.render(markup)
        except RenderTimeout as exc:
            log.error("render timed out: %s", exc)
            return _text(str(exc), 504)
        except Exception as exc:
            log.exception("render failed")
            return _text(str(exc) or "Render failed", 500)

        resp = Response(capture.png, status=200, mimetype="image/png")
        resp.headers["Cache-Control"] = "no-store"
        resp.headers["X-Ascii-Renderer"] = f"clip-singlepass-{capture.width}x{capture.height}"
        return resp

    @app.route("/api/image-to-html", methods=["POST"])
    def image_to_html_route():
        upload = request.files.get("image")
        if upload is None:
            return _text("Missing image", 400)
        try:
            config = _config_from_form(request.form)
            document = image_to_html(upload.read(), config)
        except (InvalidImage, InvalidConfig) as exc:
            return _text(str(exc), 400)
        return Response(document, status=200, mimetype="text/html")

    return app


def main():
    parser = argparse.ArgumentParser(description="Serve ASCII conversion and HTML screenshot endpoints")
    parser.add_argument("--host", default="127.0.0.1", help="Interface to bind (default: 127.0.0.1)")
    parser.add_argument("--port", type=int, default=5000, help="Port to listen on (default: 5000)")
    parser.add_argument("--debug", action="store_true", default=False, help="Enable Flask debug mode")
    parser.add_argument("--log-level", default="INFO", help="Logging level (default: INFO)")
    parser.add_argument("--log-file", default=None, help="Also write logs to this rotating file")
    args = parser.parse_args()

    setup_logging(args.log_level, log_file=args.log_file)
    create_app().run(host=args.host, port=args.port, debug=args.debug)
