# rfping_handler.py
# Triggered by: any method on any path (API Gateway proxy integration)
# Behaviour:   OPTIONS lists every recorded ping as a JSON array.
#              Anything else records a ping for the request path and answers
#              with ?code= (default 200), redirecting when ?location= is given.

import json
import logging
import re
from dataclasses import dataclass
from http import HTTPStatus
from typing import Any, Dict, List, Optional

from botocore.exceptions import BotoCoreError, ClientError

from rfping_model import Ping
from rfping_settings import Settings
from rfping_store import PingStore

LOGGER = logging.getLogger()
LOGGER.setLevel(logging.INFO)

PATH_PATTERN = re.compile(r"[0-9a-zA-Z]+")
CODE_PATTERN = re.compile(r"[0-9]{3}")
LOCATION_PATTERN = re.compile(r"[^ \t\r\n\v\f]")

DEFAULT_CODE = "200"
NO_LOCATION = "/none"
RECEIVED_HEADER = "X-RFPing-Received"


@dataclass
class ServiceContext:
    settings: Settings
    store: PingStore


_SERVICE: Optional[ServiceContext] = None


def build_context(settings: Optional[Settings] = None, store: Optional[PingStore] = None) -> ServiceContext:
    settings = settings or Settings.from_env()
    LOGGER.setLevel(settings.log_level)
    return ServiceContext(settings=settings, store=store or PingStore.from_settings(settings))


def lambda_handler(event, context):
    # One context per warm container; the DynamoDB connection is reused between invocations
    global _SERVICE
    if _SERVICE is None:
        try:
            _SERVICE = build_context()
        except (BotoCoreError, ValueError) as exc:
            return server_error(exc)
    return handle(event, context, _SERVICE)


def handle(event: Dict[str, Any], context: Any, service: ServiceContext) -> Dict[str, Any]:
    return route(_method(event))(event, context, service)


def route(method: str):
    """Pick the handler for an HTTP method; only an exact OPTIONS lists, everything else records."""
    if method == "OPTIONS":
        return list_pings
    return record


def list_pings(event: Dict[str, Any], context: Any, service: ServiceContext) -> Dict[str, Any]:
    try:
        items = service.store.scan_all()
    except (BotoCoreError, ClientError) as exc:
        return server_error(exc)

    pings: List[Dict[str, str]] = []
    for item in items:
        try:
            ping = Ping.from_item(item)
        except ValueError as exc:
            LOGGER.warning("unreadable ping item %r: %s", item, exc)
            ping = Ping()
        pings.append(ping.to_dict())

    try:
        body = json.dumps(pings)
    except (TypeError, ValueError) as exc:
        return server_error(exc)

    _log("pings_listed", context, count=len(pings))
    return _response(HTTPStatus.OK, body, {"Content-Type": "application/json"})


def record(event: Dict[str, Any], context: Any, service: ServiceContext) -> Dict[str, Any]:
    path = _path(event)
    if not PATH_PATTERN.search(path):
        return client_error(HTTPStatus.BAD_REQUEST)

    query = event.get("queryStringParameters") or {}

    code = query.get("code") or ""
    if not CODE_PATTERN.fullmatch(code):
        code = DEFAULT_CODE

    location = query.get("location") or ""
    if not LOCATION_PATTERN.search(location):
        location = NO_LOCATION

    if location != NO_LOCATION and location:
        headers = {"Location": location, RECEIVED_HEADER: "REDIR"}
    else:
        headers = {RECEIVED_HEADER: "OK"}

    try:
        status = int(code)
    except ValueError as exc:
        return server_error(exc)

    ping = Ping.new(path=path, ip=_source_ip(event))

    # Body is rendered before the write; a failed write still answers 500
    try:
        body = ping.to_json()
    except (TypeError, ValueError) as exc:
        return server_error(exc)

    try:
        service.store.put(ping)
    except (BotoCoreError, ClientError) as exc:
        return server_error(exc)

    _log("ping_recorded", context, uuid=ping.uuid, path=ping.path, status=status)
    return _response(status, body, headers)


def server_error(exc: BaseException) -> Dict[str, Any]:
    LOGGER.error("%s", exc, exc_info=exc)
    return client_error(HTTPStatus.INTERNAL_SERVER_ERROR)


def client_error(status: int) -> Dict[str, Any]:
    return _response(status, HTTPStatus(status).phrase)


def _response(status: int, body: str, headers: Optional[Dict[str, str]] = None) -> Dict[str, Any]:
    response: Dict[str, Any] = {"statusCode": int(status), "body": body}
    if headers:
        response["headers"] = headers
    return response


def _method(event: Dict[str, Any]) -> str:
    # REST API events carry httpMethod, HTTP API (v2) events nest it under requestContext.http
    method = event.get("httpMethod")
    if not method:
        method = ((event.get("requestContext") or {}).get("http") or {}).get("method", "")
    return method or ""


def _path(event: Dict[str, Any]) -> str:
    path = event.get("path")
    if path is None:
        path = event.get("rawPath")
    return path or ""


def _source_ip(event: Dict[str, Any]) -> str:
    request_context = event.get("requestContext") or {}
    source_ip = (request_context.get("identity") or {}).get("sourceIp")
    if not source_ip:
        source_ip = (request_context.get("http") or {}).get("sourceIp")
    return source_ip or ""


def _log(msg: str, context: Any, **fields: Any) -> None:
    LOGGER.info(
        json.dumps(
            {
                "level": "info",
                "msg": msg,
                "requestId": getattr(context, "aws_request_id", ""),
                **fields,
            }
        )
    )
