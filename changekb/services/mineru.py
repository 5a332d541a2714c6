from __future__ import annotations

import logging
import time
import zipfile
from pathlib import Path
from tempfile import TemporaryDirectory
from typing import Dict

import requests

from ..errors import ExtractionFailed

logger = logging.getLogger("changekb")

BASE_URL = "https://mineru.net/api/v4"


def extract_text_via_mineru(
    document_bytes: bytes,
    *,
    api_key: str,
    file_name: str = "knowledgebase.pdf",
    model_version: str = "pipeline",
    poll_interval: int = 5,
    timeout_seconds: int = 600,
) -> str:
    """
    Upload a document to MinerU, poll until the extraction finishes and return
    the markdown text of the result package.

    Raises:
        ExtractionFailed: on any API error, failed task, or timeout.
    """
    if not api_key:
        raise ExtractionFailed("MINERU_API_KEY is required for MinerU extraction")
    if not document_bytes:
        raise ExtractionFailed("Document is empty")

    try:
        batch_id = _upload_document(document_bytes, file_name, api_key, model_version)
        zip_url = _wait_for_result(batch_id, api_key, poll_interval, timeout_seconds)
        with TemporaryDirectory() as tmpdir:
            zip_path = Path(tmpdir) / "result.zip"
            _download_file(zip_url, zip_path)
            return _read_markdown_from_zip(zip_path)
    except ExtractionFailed:
        raise
    except (requests.RequestException, RuntimeError, TimeoutError, zipfile.BadZipFile, OSError) as exc:
        raise ExtractionFailed(f"MinerU extraction failed: {exc}") from exc


def get_batch_results(batch_id: str, *, api_key: str) -> dict:
    """
    Get batch processing results by batch_id.
    """
    response = _request_with_retries(
        "GET",
        f"{BASE_URL}/extract-results/batch/{batch_id}",
        headers=_mineru_headers(api_key),
    ).json()
    if response.get("code") != 0:
        raise RuntimeError(f"MinerU batch results query failed: {response}")
    return response["data"]


def _upload_document(document_bytes: bytes, file_name: str, api_key: str, model_version: str) -> str:
    payload = {
        "files": [{"name": file_name, "data_id": Path(file_name).stem}],
        "model_version": model_version,
    }
    logger.info("Requesting MinerU upload URL for %s", file_name)
    response = _request_with_retries(
        "POST",
        f"{BASE_URL}/file-urls/batch",
        json=payload,
        headers=_mineru_headers(api_key),
    ).json()
    if response.get("code") != 0:
        raise RuntimeError(f"MinerU upload URL request failed: {response}")

    batch_id = response["data"]["batch_id"]
    upload_url = response["data"]["file_urls"][0]
    upload_response = requests.put(upload_url, data=document_bytes, timeout=120)
    if upload_response.status_code != 200:
        raise RuntimeError(f"Failed to upload {file_name}: {upload_response.status_code}")

    logger.info("Uploaded %s to MinerU batch %s", file_name, batch_id)
    return batch_id


def _wait_for_result(batch_id: str, api_key: str, poll_interval: int, timeout_seconds: int) -> str:
    deadline = time.time() + timeout_seconds
    while time.time() < deadline:
        batch_data = get_batch_results(batch_id, api_key=api_key)
        tasks = batch_data.get("extract_result", [])
        logger.debug("Batch %s data: %s", batch_id, batch_data)

        if tasks:
            task = tasks[0]
            state = task.get("state")
            logger.info("MinerU batch %s state: %s", batch_id, state)
            if state == "done":
                zip_url = task.get("full_zip_url")
                if not zip_url:
                    raise RuntimeError("MinerU task completed but no result package URL provided")
                return zip_url
            if state == "failed":
                raise RuntimeError(
                    f"MinerU batch {batch_id} failed: {task.get('err_msg', 'unknown reason')}"
                )
        time.sleep(poll_interval)

    raise TimeoutError(f"Timed out waiting for MinerU batch {batch_id} to finish")


def _mineru_headers(api_key: str) -> Dict[str, str]:
    return {
        "Authorization": f"Bearer {api_key}",
        "Content-Type": "application/json",
        "Accept": "application/json",
    }


def _request_with_retries(
    method: str,
    url: str,
    *,
    max_retries: int = 3,
    base_delay: int = 2,
    **kwargs,
) -> requests.Response:
    for attempt in range(1, max_retries + 1):
        try:
            response = requests.request(method, url, timeout=30, **kwargs)
            if response.status_code == 200:
                return response
            logger.warning(
                "MinerU API %s %s returned status %s (attempt %s/%s)",
                method,
                url,
                response.status_code,
                attempt,
                max_retries,
            )
        except requests.RequestException as exc:
            logger.warning(
                "MinerU API %s %s request error on attempt %s/%s: %s",
                method,
                url,
                attempt,
                max_retries,
                exc,
            )
        if attempt < max_retries:
            time.sleep(base_delay * (2 ** (attempt - 1)))
    raise RuntimeError(f"MinerU API request failed after {max_retries} attempts: {url}")


def _download_file(url: str, destination: Path) -> None:
    logger.info("Downloading MinerU result from %s", url)
    with requests.get(url, stream=True, timeout=120) as resp:
        resp.raise_for_status()
        with destination.open("wb") as fh:
            for chunk in resp.iter_content(chunk_size=8192):
                if chunk:
                    fh.write(chunk)


def _read_markdown_from_zip(zip_path: Path) -> str:
    with zipfile.ZipFile(zip_path) as zf:
        markdown_names = [info for info in zf.infolist() if info.filename.lower().endswith(".md")]
        if not markdown_names:
            raise ExtractionFailed("No markdown file found in MinerU result package")
        # The full document is the largest markdown file in the package.
        selected = max(markdown_names, key=lambda info: info.file_size)
        logger.info("Selected markdown file %s from MinerU results", selected.filename)
        return zf.read(selected).decode("utf-8", errors="replace")


__all__ = ["extract_text_via_mineru", "get_batch_results"]
