#!/usr/bin/env python3
# scripts/trusted_sources.py

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from sourcetrust.core.config import load_config
from sourcetrust.normalize.hash_utils import (
    HashAlgorithmName,
    compute_fingerprint_from_file,
)
from sourcetrust.normalize.schema import CertificateTrustEntry, TrustedSource
from sourcetrust.registry.provider import TrustedSourceRegistry
from sourcetrust.settings.yaml_store import YamlSettingsStore

# Configure logging
logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger("trusted_sources")


def format_source(source: TrustedSource) -> str:
    lines = [source.source_name]
    if source.service_index:
        lines.append(f"  Service index: {source.service_index}")
    for cert in source.certificates:
        lines.append(
            f"  [{cert.priority}] {cert.fingerprint_algorithm.value} {cert.fingerprint} {cert.subject_name}"
        )
    return "\n".join(lines)


def cmd_list(registry: TrustedSourceRegistry, args: argparse.Namespace) -> int:
    snapshot = registry.load_all()
    if not len(snapshot):
        print("No trusted sources.")
        return 0
    for source in sorted(snapshot, key=lambda s: s.source_name.lower()):
        print(format_source(source))
    return 0


def cmd_show(registry: TrustedSourceRegistry, args: argparse.Namespace) -> int:
    source = registry.load_all().find(args.name)
    if source is None:
        logger.error(f"Trusted source not found: {args.name}")
        return 1
    print(format_source(source))
    return 0


def cmd_add(registry: TrustedSourceRegistry, args: argparse.Namespace) -> int:
    algorithm = HashAlgorithmName(args.algorithm)
    if args.certificate_file:
        fingerprint = compute_fingerprint_from_file(args.certificate_file, algorithm)
        logger.info(f"Computed {algorithm.value} fingerprint {fingerprint}")
    else:
        fingerprint = args.fingerprint

    source = registry.load_all().find(args.name)
    if source is None:
        source = TrustedSource(source_name=args.name)

    entry = CertificateTrustEntry(
        fingerprint=fingerprint,
        subject_name=args.subject,
        fingerprint_algorithm=algorithm,
        priority=args.priority,
    )
    existing = source.find_certificate(entry.fingerprint)
    if existing is not None:
        source.certificates[source.certificates.index(existing)] = entry
    else:
        source.certificates.append(entry)

    if args.service_index:
        source.service_index = args.service_index

    registry.save_one(source)
    return 0


def cmd_remove(registry: TrustedSourceRegistry, args: argparse.Namespace) -> int:
    if not registry.delete_one(args.name):
        logger.info(f"No trusted source named {args.name}, nothing removed")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Manage certificates trusted to sign content from package sources",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Trust a certificate by fingerprint
  trusted_sources.py add nuget.org --fingerprint 0E5F38F5... --subject "CN=NuGet.org Repository by Microsoft" \\
                     --service-index https://api.nuget.org/v3/index.json

  # Trust a certificate file
  trusted_sources.py add myfeed --certificate-file signer.cer --subject "CN=Contoso"

  # Remove a source
  trusted_sources.py remove myfeed
        """,
    )
    parser.add_argument(
        "--config",
        default="config/config.yaml",
        help="Configuration file path (default: config/config.yaml)",
    )
    parser.add_argument(
        "--settings-file", help="Trusted sources settings file (overrides config)"
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable verbose logging"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    list_parser = subparsers.add_parser("list", help="List all trusted sources")
    list_parser.set_defaults(handler=cmd_list)

    show_parser = subparsers.add_parser("show", help="Show one trusted source")
    show_parser.add_argument("name", help="Source name (case-insensitive)")
    show_parser.set_defaults(handler=cmd_show)

    add_parser = subparsers.add_parser(
        "add", help="Add or update a certificate for a trusted source"
    )
    add_parser.add_argument("name", help="Source name")
    cert_group = add_parser.add_mutually_exclusive_group(required=True)
    cert_group.add_argument("--fingerprint", help="Certificate fingerprint")
    cert_group.add_argument(
        "--certificate-file", help="Certificate file (DER or PEM) to fingerprint"
    )
    add_parser.add_argument("--subject", required=True, help="Certificate subject name")
    add_parser.add_argument(
        "--algorithm",
        choices=[a.value for a in HashAlgorithmName],
        default=HashAlgorithmName.SHA256.value,
        help="Fingerprint algorithm (default: SHA256)",
    )
    add_parser.add_argument(
        "--priority", type=int, default=0, help="Certificate priority (default: 0)"
    )
    add_parser.add_argument("--service-index", help="Trusted service index URL")
    add_parser.set_defaults(handler=cmd_add)

    remove_parser = subparsers.add_parser("remove", help="Remove a trusted source")
    remove_parser.add_argument("name", help="Source name (case-insensitive)")
    remove_parser.set_defaults(handler=cmd_remove)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    # Load configuration
    try:
        config = load_config(args.config)
    except Exception as e:
        logger.error(f"Failed to load configuration: {e}")
        return 1

    logging.getLogger().setLevel(logging.DEBUG if args.verbose else config.log_level)

    settings_file = args.settings_file or config.settings_file
    registry = TrustedSourceRegistry(YamlSettingsStore(settings_file))

    try:
        return args.handler(registry, args)
    except Exception as e:
        logger.error(f"{args.command} failed: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
