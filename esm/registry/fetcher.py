"""
Download of scenario scripts into a temporary staging directory.

Nothing is written into the scenario store here; the caller moves the staged
file into place once the download has completed.
"""
import os
import shutil
import logging
import posixpath
from typing import Tuple
from urllib.parse import unquote, urlparse

import requests

from esm.errors import FetchError
from esm.scenario.store import SCENARIO_EXTENSION, validate_identifier

logger = logging.getLogger("esm.registry.fetcher")

SCRIPT_URL_TEMPLATE = "https://raw.githubusercontent.com/daid/EmptyEpsilon/master/scripts/{identifier}.lua"
FALLBACK_FILE_NAME = "tmp.bin"


def resolve_url(identifier: str) -> str:
    """URL of the upstream script for `identifier`."""
    return SCRIPT_URL_TEMPLATE.format(identifier=identifier)


def is_remote(uri: str) -> bool:
    return urlparse(uri).scheme in ("http", "https")


def looks_like_path(uri: str) -> bool:
    """True when `uri` names a local file rather than a bare identifier."""
    separators = [os.sep, "/", os.altsep]
    if any(sep and sep in uri for sep in separators):
        return True
    return uri.startswith(".") or uri.endswith(SCENARIO_EXTENSION) or os.path.isabs(uri)


def resolve_source(uri: str) -> Tuple[str, str]:
    """
    Work out where a scenario comes from.

    Args:
        uri: an http(s) URL, a path to a local script, or a bare identifier.
            Only arguments that look like paths (a separator, a leading dot,
            a .lua suffix or an absolute path) are read from disk.

    Returns:
        (identifier, source) where source is a URL or a local file path

    Raises:
        InvalidIdentifierError: if no usable identifier can be derived
        FetchError: if a path-like argument is not an existing file
    """
    if is_remote(uri):
        segment = _last_segment(urlparse(uri).path)
        identifier = os.path.splitext(segment)[0]
        return validate_identifier(identifier), uri
    if looks_like_path(uri):
        if not os.path.isfile(uri):
            raise FetchError(f"Scenario file not found: {uri}")
        identifier = os.path.splitext(os.path.basename(uri))[0]
        return validate_identifier(identifier), uri
    validate_identifier(uri)
    return uri, resolve_url(uri)


def fetch(url: str, dest_dir: str) -> str:
    """
    Download `url` into `dest_dir`.

    The file is named after the last path segment of the final response URL,
    or 'tmp.bin' when there is none.

    Returns:
        Path of the staged file

    Raises:
        FetchError: on any transport error or non-success status
    """
    logger.info(f"Downloading {url}")
    try:
        response = requests.get(url)
        response.raise_for_status()
    except requests.RequestException as e:
        raise FetchError(f"Could not download {url}", str(e)) from e

    file_name = posixpath.basename(urlparse(response.url).path)
    if file_name in ("", ".", ".."):
        file_name = FALLBACK_FILE_NAME
    dest = os.path.join(dest_dir, file_name)
    logger.info(f"Will be located under: {dest}")
    try:
        with open(dest, "wb") as f:
            f.write(response.content)
    except OSError as e:
        raise FetchError(f"Could not write download to {dest}", str(e)) from e
    return dest


def stage_local(path: str, dest_dir: str) -> str:
    """Copy a local scenario file into `dest_dir` and return the copy's path."""
    dest = os.path.join(dest_dir, os.path.basename(path) or FALLBACK_FILE_NAME)
    shutil.copyfile(path, dest)
    logger.info(f"Staged local file {path} as {dest}")
    return dest


def _last_segment(url_path: str) -> str:
    return unquote(posixpath.basename(url_path))
