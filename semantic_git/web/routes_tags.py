from __future__ import annotations

import logging
from typing import Any, cast

from flask import Blueprint, abort, current_app, jsonify, request
from flask.typing import ResponseReturnValue

from ..config import APP_CONFIG_KEY, Config, load_config
from ..errors import GitCommandError, GrammarMismatch, MissingParentTag, TagError
from ..models.records import descriptor_to_dict, resolution_to_dict
from ..services.history_service import describe_repository, log_warnings, resolve_repository
from ..versioning.descriptor import describe
from ..versioning.history import resolve_history

bp = Blueprint('tags', __name__)

KEY_ERROR = 'error'


def _error_body(exc: TagError) -> dict[str, Any]:
    body: dict[str, Any] = {KEY_ERROR: str(exc)}
    if isinstance(exc, GrammarMismatch):
        body['descriptor'] = exc.text
    elif isinstance(exc, MissingParentTag):
        body['head'] = exc.head
        body['parent'] = exc.parent
    return body


def _repo_config() -> Config:
    cfg = current_app.config.get(APP_CONFIG_KEY)
    return cfg if isinstance(cfg, Config) else load_config()


@bp.route('/version', methods=['GET'])
def version() -> ResponseReturnValue:
    """Parse a single descriptor.

    Query params:
      - descriptor: tag or ``git describe`` output, e.g. v1.0.2-6-g778787d

    Response JSON: major, minor, patch (commits added), commits, commit,
    pre_release, version, informational_version, title.
    Returns 400 without descriptor and 422 when it is not semantic.
    """
    text = request.args.get('descriptor') or ''
    if not text:
        abort(400, 'descriptor is required')
    try:
        desc = describe(text)
    except GrammarMismatch as exc:
        logging.getLogger('api').info('Rejected descriptor %r', text)
        return jsonify(_error_body(exc)), 422
    return jsonify(descriptor_to_dict(desc))


@bp.route('/tags', methods=['POST'])
def tags() -> ResponseReturnValue:
    """Resolve a posted tag listing.

    Body JSON: {"listing": "<tag> <subject>\\n...", "head": str, "head_title": str?}

    Response JSON: { head, tags, warnings }; tags are newest first.
    Errors:
      - 400 if head is missing, or listing or head_title is not a string
      - 422 if head is not semantic or its parent tag is not listed
    """
    data: dict[str, Any] = cast(dict[str, Any], request.get_json(force=True, silent=True) or {})
    listing = data.get('listing', '')
    head = str(data.get('head') or '').strip()
    head_title = data.get('head_title')
    if not head:
        abort(400, 'head is required')
    if not isinstance(listing, str):
        abort(400, 'listing must be a string')
    if head_title is not None and not isinstance(head_title, str):
        abort(400, 'head_title must be a string')
    try:
        resolution = resolve_history(listing, head, head_title)
    except TagError as exc:
        logging.getLogger('api').info('Tag resolution failed for head=%s: %s', head, exc)
        return jsonify(_error_body(exc)), 422
    log_warnings(resolution)
    return jsonify(resolution_to_dict(resolution))


@bp.route('/repo/tags', methods=['GET'])
def repo_tags() -> ResponseReturnValue:
    """Resolve the configured repository's tags against its checked out head.

    Query params:
      - head_title: optional title override for an unreleased HEAD
    """
    head_title = request.args.get('head_title') or None
    try:
        resolution = resolve_repository(_repo_config(), head_title=head_title)
    except GitCommandError as exc:
        logging.getLogger('api').warning('git failed: %s', exc)
        return jsonify({KEY_ERROR: str(exc)}), 502
    except TagError as exc:
        return jsonify(_error_body(exc)), 422
    return jsonify(resolution_to_dict(resolution))


@bp.route('/repo/version', methods=['GET'])
def repo_version() -> ResponseReturnValue:
    try:
        desc = describe_repository(_repo_config())
    except GitCommandError as exc:
        logging.getLogger('api').warning('git failed: %s', exc)
        return jsonify({KEY_ERROR: str(exc)}), 502
    except TagError as exc:
        return jsonify(_error_body(exc)), 422
    return jsonify(descriptor_to_dict(desc))
