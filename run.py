#!/usr/bin/env python3
"""
Aliyun messaging CLI -- send one template SMS or place one TTS voice call.

Options not given on the command line fall back to config (environment,
.env, or --config JSON file).

Usage:
  uv run python run.py --config config.json sms
  uv run python run.py sms --phone 13800138000 --sign-name test --template-code SMS_1 --template-param '{"code":"1234"}'
  uv run python run.py --dry-run tts --called-number 13800138000 --tts-code TTS_1
"""

from __future__ import annotations

import argparse
import logging
import sys

from client.models import Response
from client.params import out_id
from client.pop import PopClient, PopError
from client.sms import SmsClient
from client.vms import VoiceClient
from config import Config, has_credentials, load_config
from monitor.logger import setup_logging

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_REJECTED = 1
EXIT_ERROR = 2


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Aliyun SMS / voice call client")
    parser.add_argument("--config", type=str, default=None, help="Path to JSON config file (overrides environment)")
    parser.add_argument("--json-log", type=str, default=None, help="Path to JSON log file for machine-readable output")
    parser.add_argument("--log-file", type=str, default=None, help="Path to verbose debug log file")
    parser.add_argument("--dry-run", action="store_true", help="Print the signed request URL without sending it")
    sub = parser.add_subparsers(dest="command", required=True)

    sms = sub.add_parser("sms", help="Send a template SMS")
    sms.add_argument("--phone", action="append", default=None, help="Destination number (repeatable)")
    sms.add_argument("--sign-name", type=str, default=None)
    sms.add_argument("--template-code", type=str, default=None)
    sms.add_argument("--template-param", type=str, default=None, help='Template JSON, e.g. \'{"code":"1234"}\'')
    sms.add_argument("--out-id", type=str, default=None, help="Caller tracking ID")

    tts = sub.add_parser("tts", help="Place a text-to-speech voice call")
    tts.add_argument("--called-show-number", type=str, default=None)
    tts.add_argument("--called-number", type=str, default=None)
    tts.add_argument("--tts-code", type=str, default=None)
    tts.add_argument("--tts-param", type=str, default=None)
    return parser.parse_args(argv)


def _pick(value, fallback):
    return fallback if value is None else value


def build_client(args: argparse.Namespace, cfg: Config) -> PopClient:
    if args.command == "sms":
        return SmsClient(
            cfg.access_key_id, cfg.access_key_secret,
            endpoint=cfg.sms_endpoint, region_id=cfg.region_id, timeout=cfg.timeout_sec,
        )
    return VoiceClient(
        cfg.access_key_id, cfg.access_key_secret,
        endpoint=cfg.vms_endpoint, region_id=cfg.region_id, timeout=cfg.timeout_sec,
    )


def build_request(args: argparse.Namespace, cfg: Config) -> tuple[dict[str, str], list]:
    """Return (required business fields, overrides) for the chosen command."""
    if args.command == "sms":
        required = SmsClient.sms_params(
            _pick(args.phone, cfg.phone_numbers),
            _pick(args.sign_name, cfg.sign_name),
            _pick(args.template_code, cfg.template_code),
            _pick(args.template_param, cfg.template_param),
        )
        params = [out_id(args.out_id)] if args.out_id else []
        return required, params
    required = VoiceClient.tts_params(
        _pick(args.called_show_number, cfg.called_show_number),
        _pick(args.called_number, cfg.called_number),
        _pick(args.tts_code, cfg.tts_code),
        _pick(args.tts_param, cfg.tts_param),
    )
    return required, []


def _report(ok: bool, resp: Response) -> None:
    print(
        f"ok={ok} code={resp.code} message={resp.message} "
        f"request_id={resp.request_id} biz_id={resp.biz_id} call_id={resp.call_id}"
    )


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    try:
        cfg = load_config(args.config)
    except ValueError as e:
        print(f"Config error: {e}", file=sys.stderr)
        return EXIT_ERROR

    setup_logging(cfg.log_level, log_file=args.log_file, json_log_file=args.json_log)

    if not has_credentials(cfg):
        logger.error("ACCESS_KEY_ID and ACCESS_KEY_SECRET are required.")
        return EXIT_ERROR

    required, params = build_request(args, cfg)
    with build_client(args, cfg) as api:
        if args.dry_run:
            print(api.signed_url(required, params))
            return EXIT_OK
        try:
            ok, resp = api.call(required, params)
        except PopError as e:
            logger.error("%s failed: %s", api.ACTION, e)
            return EXIT_ERROR

    _report(ok, resp)
    return EXIT_OK if ok else EXIT_REJECTED


if __name__ == "__main__":
    sys.exit(main())
