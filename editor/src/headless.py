"""Headless Layer Tagger - CLI entry point.

Encodes, decodes and classifies layer names, and tags the layers of a layer
manifest without starting the GUI.

Usage:
    python editor/src/headless.py encode <base_name> [--kind Text] [--properties JSON]
    python editor/src/headless.py decode <name> [<name> ...]
    python editor/src/headless.py classify <name> [<name> ...]
    python editor/src/headless.py tag <manifest> [-o OUTPUT] [--all] [--extra opacity]

Examples:
    python editor/src/headless.py encode icon --kind Image --properties '{"size":[64,64]}'
    python editor/src/headless.py classify 'logo@Texture:{"size":[128,128]}'
    python editor/src/headless.py tag layers.json --all -o layers_tagged.json
"""

import sys
import os
import json
import argparse
import logging

# Add editor/src to path so imports work
_src_dir = os.path.dirname(os.path.abspath(__file__))
if _src_dir not in sys.path:
    sys.path.insert(0, _src_dir)

from constants import KNOWN_TAGS, OPTIONAL_LAYER_PROPERTIES


def _cmd_encode(args):
    from services.name_codec import encode, LayerNameError

    try:
        properties = json.loads(args.properties) if args.properties else {}
    except ValueError as e:
        print(f"Error: --properties is not valid JSON: {e}")
        return 1

    try:
        print(encode(args.base_name, args.kind, properties))
    except LayerNameError as e:
        print(f"Error: {e}")
        return 1
    return 0


def _cmd_decode(args):
    from services.name_codec import decode

    for name in args.names:
        metadata = decode(name)
        print(json.dumps({
            'baseName': metadata.base_name,
            'kind': metadata.kind,
            'properties': metadata.properties,
        }, ensure_ascii=False))
    return 0


def _cmd_classify(args):
    from services.name_codec import classify

    for name in args.names:
        print(f"{classify(name)}\t{name}")
    return 0


def _cmd_tag(args):
    from models.host import Host
    from services.ports import HostDocumentPort
    from services.file_operations import load_manifest_from_file, save_manifest_to_file, ManifestError
    from actions.populate_actions import populate_selected_layers

    input_path = os.path.abspath(args.manifest)
    output_path = os.path.abspath(args.output) if args.output else input_path

    if not os.path.isfile(input_path):
        print(f"Error: Manifest not found: {input_path}")
        return 1

    try:
        document = load_manifest_from_file(input_path)
    except ManifestError as e:
        print(f"Error: {e}")
        return 1

    host = Host(alert_handler=lambda message: print(message))
    host.open_document(document)
    if args.all:
        # Stack order, bottom layer first
        document.select_layers([layer.id for layer in document.layers])

    extra = [p.strip() for p in args.extra.split(',') if p.strip()] if args.extra else []
    new_names = populate_selected_layers(HostDocumentPort(host), extra)
    if not new_names:
        return 1

    save_manifest_to_file(document, output_path)
    print(f"Tagged {len(new_names)} layer(s) -> {output_path}")
    return 0


def build_parser():
    parser = argparse.ArgumentParser(
        description='Encode layer metadata into layer names (headless).',
    )
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Enable verbose logging.',
    )
    subparsers = parser.add_subparsers(dest='command', required=True)

    encode_parser = subparsers.add_parser('encode', help='Encode a layer name.')
    encode_parser.add_argument('base_name', help='Layer name; an existing tag is replaced.')
    encode_parser.add_argument(
        '-k', '--kind',
        default='Image',
        help=f"Tag to write (known tags: {', '.join(KNOWN_TAGS)}; default: Image).",
    )
    encode_parser.add_argument(
        '-p', '--properties',
        default=None,
        help='Properties as a JSON object (default: {}).',
    )
    encode_parser.set_defaults(func=_cmd_encode)

    decode_parser = subparsers.add_parser('decode', help='Decode layer names to JSON.')
    decode_parser.add_argument('names', nargs='+', help='Layer names.')
    decode_parser.set_defaults(func=_cmd_decode)

    classify_parser = subparsers.add_parser('classify', help='Print the panel each name routes to.')
    classify_parser.add_argument('names', nargs='+', help='Layer names.')
    classify_parser.set_defaults(func=_cmd_classify)

    tag_parser = subparsers.add_parser('tag', help='Populate and rename layers of a manifest.')
    tag_parser.add_argument('manifest', help='Path to a layer manifest JSON file.')
    tag_parser.add_argument(
        '-o', '--output',
        default=None,
        help='Output manifest path (default: overwrite the input).',
    )
    tag_parser.add_argument(
        '-a', '--all',
        action='store_true',
        help='Tag every layer instead of the manifest selection.',
    )
    tag_parser.add_argument(
        '-e', '--extra',
        default='',
        help=f"Comma separated extra properties ({', '.join(OPTIONAL_LAYER_PROPERTIES)}).",
    )
    tag_parser.set_defaults(func=_cmd_tag)

    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    # Logging
    level = logging.DEBUG if args.verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    return args.func(args)


if __name__ == '__main__':
    sys.exit(main())
