"""
Flask application for the file server.

Routes:
 - GET  /?path=<rel>          tree listing + upload form
 - POST /?path=<rel>          upload one file (field ``file``) into ``path``
 - GET  /download/<rel>       stream a file as an attachment

Every request, including unknown routes, passes the local-network gate
before any path is resolved.
"""

import logging
import os
import posixpath
import stat
from urllib.parse import quote

from flask import Flask, request, redirect, url_for, send_file, render_template_string

from . import APP_NAME
from .access import is_permitted
from .errors import (
    AccessDeniedError, BadRequestError, FileServerError, NotFoundError, PathEscapeError,
)
from .listing import list_tree
from .page import LISTING_PAGE
from .paths import breadcrumbs, normalize, resolve

log = logging.getLogger(__name__)


def content_disposition_attachment(filename):
    """Quoted ASCII filename, plus RFC 6266 ``filename*`` when the name is not plain ASCII."""
    fallback = "".join(ch if 0x20 <= ord(ch) < 0x7F else "_" for ch in filename)
    quoted = fallback.replace("\\", "\\\\").replace('"', '\\"')
    value = f'attachment; filename="{quoted}"'
    if fallback != filename:
        value += f"; filename*=UTF-8''{quote(filename, safe='')}"
    return value


def upload_filename(client_name):
    """Base name of a client-supplied upload filename, either separator style."""
    name = client_name.replace("\\", "/").rsplit("/", 1)[-1]
    if name in ("", ".", ".."):
        raise BadRequestError("Error retrieving file from form: invalid filename")
    return name


def create_app(config):
    app = Flask(__name__)
    app.config['MAX_CONTENT_LENGTH'] = config.max_upload_bytes

    # compile once now so a broken template stops startup rather than the first request
    app.jinja_env.from_string(LISTING_PAGE)

    @app.before_request
    def enforce_local_network():
        client = request.remote_addr or ""
        if not is_permitted(client, config.local_only):
            log.warning("Blocked access from non-local IP: %s", client)
            raise AccessDeniedError()

    @app.errorhandler(FileServerError)
    def handle_error(error):
        return error.message, error.status_code, {"Content-Type": "text/plain; charset=utf-8"}

    def index():
        if request.method == 'POST':
            return upload_file()
        return show_listing()

    def show_listing():
        try:
            current_path = normalize(request.args.get("path", ""))
            files = list_tree(config.root, current_path, config.max_depth)
        except PathEscapeError as exc:
            raise BadRequestError(f"Invalid path: {exc}") from exc
        except FileNotFoundError as exc:
            raise NotFoundError("Directory not found") from exc
        except NotADirectoryError as exc:
            raise BadRequestError("Not a directory") from exc
        except OSError as exc:
            log.error("Error reading directory %r: %s", current_path, exc)
            raise FileServerError(f"Error reading directory: {exc.strerror or exc}") from exc

        return render_template_string(
            LISTING_PAGE,
            title=APP_NAME,
            files=files,
            current_path=current_path,
            breadcrumbs=breadcrumbs(current_path),
        )

    def upload_file():
        upload = request.files.get("file")
        if upload is None or not upload.filename:
            raise BadRequestError("Error retrieving file from form: no file part")

        target = request.form.get("path", request.args.get("path", ""))
        try:
            target = normalize(target)
            upload_dir = resolve(config.root, target)
            name = upload_filename(upload.filename)
            dest = resolve(config.root, posixpath.join(target, name))
        except PathEscapeError as exc:
            raise BadRequestError(f"Invalid upload path: {exc}") from exc

        try:
            os.makedirs(upload_dir, exist_ok=True)
        except OSError as exc:
            raise FileServerError(f"Error creating directory: {exc.strerror or exc}") from exc

        # FileStorage.save streams to disk and closes the destination on every path
        try:
            upload.save(dest)
        except OSError as exc:
            log.error("Error saving %r: %s", dest, exc)
            raise FileServerError(f"Error saving file: {exc.strerror or exc}") from exc

        log.info("File uploaded successfully: %s to /%s", name, target)
        if target:
            return redirect(url_for('index', path=target), code=303)
        return redirect(url_for('index'), code=303)

    def download_file(filename=""):
        if not filename:
            raise BadRequestError("No file specified")
        try:
            full_path = resolve(config.root, filename)
        except PathEscapeError as exc:
            raise BadRequestError(f"Invalid file path: {exc}") from exc

        try:
            info = os.stat(full_path)
        except (FileNotFoundError, NotADirectoryError) as exc:
            raise NotFoundError("File not found") from exc
        except OSError as exc:
            raise FileServerError(f"Error accessing file: {exc.strerror or exc}") from exc

        if stat.S_ISDIR(info.st_mode):
            raise BadRequestError("Cannot download directories")

        name = posixpath.basename(normalize(filename))
        try:
            response = send_file(
                full_path,
                mimetype="application/octet-stream",
                as_attachment=True,
                download_name=name,
            )
        except OSError as exc:
            raise FileServerError(f"Error accessing file: {exc.strerror or exc}") from exc
        response.headers["Content-Disposition"] = content_disposition_attachment(name)
        log.info("File downloaded: %s", normalize(filename))
        return response

    # route table: method + prefix -> handler
    app.add_url_rule('/', 'index', index, methods=['GET', 'POST'])
    app.add_url_rule('/download/', 'download_file', download_file, defaults={'filename': ''})
    app.add_url_rule('/download/<path:filename>', 'download_file', download_file)

    return app
