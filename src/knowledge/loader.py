"""
Dataset Loader
--------------
Reads the pre-generated business datasets (JSON arrays of flat objects).

Datasets are read from the deployment directory, or from S3 when DATA_BUCKET
is set. A missing or corrupt dataset never fails the request: the failure is
logged and the dataset comes back empty.
"""

import json
import os
from typing import Any, Dict, List, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

import config
from utils.logger import logger

Record = Dict[str, Any]

# Lazy initialization
_s3 = None


def _get_s3_client():
    """Lazily initialize S3 client."""
    global _s3
    if _s3 is None:
        logger.info(f"Initializing S3 client in region: {config.AWS_REGION}")
        _s3 = boto3.client("s3", region_name=config.AWS_REGION)
    return _s3


def _read_local(resource_name: str, data_dir: str) -> str:
    file_path = os.path.join(data_dir, resource_name)
    with open(file_path, "r", encoding="utf-8") as f:
        return f.read()


def _read_s3(resource_name: str, bucket: str) -> str:
    key = f"{config.DATA_PREFIX}{resource_name}"
    response = _get_s3_client().get_object(Bucket=bucket, Key=key)
    return response["Body"].read().decode("utf-8")


def _as_records(resource_name: str, parsed: Any) -> List[Record]:
    if not isinstance(parsed, list):
        logger.warning(
            f"Dataset {resource_name} is a JSON {type(parsed).__name__}, expected an array; ignoring it"
        )
        return []

    records = [row for row in parsed if isinstance(row, dict)]
    skipped = len(parsed) - len(records)
    if skipped:
        logger.warning(f"Skipped {skipped} non-object entries in {resource_name}")
    return records


def load_dataset(resource_name: str, data_dir: Optional[str] = None) -> List[Record]:
    """
    Load one dataset as a list of records.

    Args:
        resource_name: File name of the dataset, e.g. "sales_orders.json"
        data_dir: Directory override; defaults to config.DATA_DIR

    Returns:
        List of record dicts, empty if the dataset could not be read
    """
    try:
        if config.DATA_BUCKET and data_dir is None:
            raw = _read_s3(resource_name, config.DATA_BUCKET)
        else:
            raw = _read_local(resource_name, data_dir or config.DATA_DIR)
        parsed = json.loads(raw)
    except (OSError, ValueError, BotoCoreError, ClientError) as e:
        logger.error(f"Failed to load dataset {resource_name}: {e}")
        return []

    return _as_records(resource_name, parsed)
