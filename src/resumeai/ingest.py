# Copyright 2026 Justin Cook
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
Reads job descriptions from text files, DOCX, PDF or a URL.
"""

import logging
import os

import requests
from bs4 import BeautifulSoup
from docx import Document
from pypdf import PdfReader

from resumeai.config import get_ca_bundle
from resumeai.errors import IngestError

logger = logging.getLogger(__name__)

USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/123.0.0.0 Safari/537.36"
)


def read_docx(file_path: str) -> str:
    try:
        doc = Document(file_path)
    except Exception as e:
        raise IngestError(f"Error reading {file_path}: {e}") from e
    return '\n'.join(para.text for para in doc.paragraphs)


def read_pdf(file_path: str) -> str:
    try:
        reader = PdfReader(file_path)
        return '\n'.join(page.extract_text() or "" for page in reader.pages)
    except Exception as e:
        raise IngestError(f"Error reading PDF {file_path}: {e}") from e


def extract_text_from_html(html) -> str:
    """Extracts clean text from raw HTML content."""
    soup = BeautifulSoup(html, 'html.parser')

    for script in soup(["script", "style"]):
        script.decompose()

    lines = (line.strip() for line in soup.get_text().splitlines())
    # Break multi-headlines into a line each
    chunks = (phrase.strip() for line in lines for phrase in line.split("  "))
    return '\n'.join(chunk for chunk in chunks if chunk)


def read_url(url: str) -> str:
    try:
        response = requests.get(url, headers={'User-Agent': USER_AGENT}, timeout=15, verify=get_ca_bundle())
        response.raise_for_status()
    except requests.RequestException as e:
        raise IngestError(f"Failed to fetch {url}: {e}") from e
    return extract_text_from_html(response.content)


def read_job_description(source: str) -> str:
    """
    Loads a job description from a URL or a local .txt/.docx/.pdf file.
    Raises IngestError if nothing readable comes back.
    """
    logger.info(f"Ingesting Job Description from: {source}")
    if source.startswith(("http://", "https://")):
        text = read_url(source)
    elif not os.path.exists(source):
        raise IngestError(f"Job description not found: {source}")
    elif source.lower().endswith(".docx"):
        text = read_docx(source)
    elif source.lower().endswith(".pdf"):
        text = read_pdf(source)
    else:
        try:
            with open(source, 'r', encoding='utf-8') as f:
                text = f.read()
        except (OSError, UnicodeDecodeError) as e:
            raise IngestError(f"Failed to read JD file: {e}") from e

    text = text.strip()
    if not text:
        raise IngestError(f"Could not extract text from {source}")
    logger.debug(f"Job description: {len(text)} chars")
    return text
