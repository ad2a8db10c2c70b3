#!/usr/bin/env python3
# aws_platform_manager.py
"""
Helper functions for running the share API on the AWS platform.
"""

from __future__ import annotations

import logging

import boto3

""" AWS Parameter Store """


def get_parameters(
    param_names: list[str] | str,
    base_path: str,
    *,
    decrypt: bool = False,
    region_name: str = "us-east-1",
) -> dict[str, str | None]:
    """
    Read the share API parameters stored under one Parameter Store path.

    The whole path is listed with a paginator (settings live in a single flat folder), then
    narrowed to the requested leaf names. Leaf names are matched case-insensitively.

    Args:
        param_names (list[str] | str): Leaf names to return.
        base_path (str): Folder holding the parameters, e.g. "/apps/prod/chatgpt-share/".
        decrypt (bool): Decrypt SecureString values.
        region_name (str): AWS region of the parameter store.

    Returns:
        dict: Maps each requested lower-case leaf name to its value, or None when absent.
    """
    if isinstance(param_names, str):
        param_names = [param_names]

    wanted = {name.lower() for name in param_names}
    result: dict[str, str | None] = dict.fromkeys(wanted)
    if not wanted:
        return result

    ssm = boto3.client("ssm", region_name=region_name)
    paginator = ssm.get_paginator("get_parameters_by_path")
    pages = paginator.paginate(
        Path=base_path.rstrip("/") + "/", Recursive=False, WithDecryption=decrypt
    )

    for page in pages:
        for parameter in page.get("Parameters", []):
            leaf = parameter["Name"].rsplit("/", 1)[-1].lower()
            if leaf in wanted:
                result[leaf] = parameter["Value"]

    return result


""" AWS CloudWatch """


def create_logger(
    log_level: str = "INFO", logger_name: str = "chatgpt-share-api"
) -> logging.Logger:
    """
    Create a logger for AWS Lambda that outputs to CloudWatch.

    Args:
        log_level (str): Logging level (e.g., "INFO", "DEBUG").
        logger_name (str): Name for the logger instance.

    Returns:
        logging.Logger: Configured logger instance.
    """
    level = getattr(logging, log_level.upper(), logging.INFO)
    logger = logging.getLogger(logger_name)
    logger.setLevel(level)

    # Lambda captures stdout, so one stream handler is enough
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setLevel(level)
        handler.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
        logger.addHandler(handler)

    return logger
