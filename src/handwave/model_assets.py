from __future__ import annotations

import logging
import os
import ssl
import subprocess
import urllib.error
import urllib.request


logger = logging.getLogger(__name__)

HAND_LANDMARKER_TASK_URL = (
    "https://storage.googleapis.com/mediapipe-models/hand_landmarker/hand_landmarker/float16/latest/hand_landmarker.task"
)


def _ssl_context() -> ssl.SSLContext:
    # python.org macOS builds often ship without root certificates; certifi fixes that when present.
    try:
        import certifi  # type: ignore
    except ImportError:
        return ssl.create_default_context()
    return ssl.create_default_context(cafile=certifi.where())


def _remove_partial(path: str) -> None:
    if os.path.exists(path):
        os.remove(path)


def _download_with_urllib(url: str, model_path: str, timeout_s: int) -> None:
    with urllib.request.urlopen(url, context=_ssl_context(), timeout=timeout_s) as r, open(model_path, "wb") as f:
        f.write(r.read())


def _download_with_curl(url: str, model_path: str) -> subprocess.CompletedProcess:
    return subprocess.run(
        ["curl", "-L", "-o", model_path, url],
        check=False,
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
        text=True,
    )


def ensure_hand_landmarker_task(model_path: str, *, url: str = HAND_LANDMARKER_TASK_URL, timeout_s: int = 30) -> str:
    """
    Return `model_path`, downloading the HandLandmarker model there first if it is missing.

    urllib is tried first and `curl` second, since curl often gets through
    where Python's certificate store is broken. Raises RuntimeError when both fail.
    """

    if os.path.exists(model_path):
        return model_path

    os.makedirs(os.path.dirname(model_path) or ".", exist_ok=True)
    logger.info("downloading hand landmarker model to %s", model_path)

    try:
        _download_with_urllib(url, model_path, timeout_s)
        return model_path
    except (urllib.error.URLError, OSError) as e:
        logger.warning("urllib download failed (%s); retrying with curl", e)
        _remove_partial(model_path)
        first_error = e

    curl_err = ""
    try:
        proc = _download_with_curl(url, model_path)
    except FileNotFoundError:
        curl_err = "curl is not installed"
    else:
        if proc.returncode == 0 and os.path.exists(model_path) and os.path.getsize(model_path) > 0:
            return model_path
        curl_err = proc.stderr.strip()

    _remove_partial(model_path)
    raise RuntimeError(
        "Missing MediaPipe Tasks model file and auto-download failed.\n\n"
        f"Expected model at: {model_path}\n"
        f"URL: {url}\n\n"
        "Download it manually:\n"
        f'  mkdir -p "{os.path.dirname(model_path) or "."}"\n'
        f'  curl -L -o "{model_path}" "{url}"\n\n'
        f"curl: {curl_err}"
    ) from first_error
