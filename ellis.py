#!/usr/bin/env python3
"""ELLIS - Scala tuning file codec

Reads Scala (.scl) files, prints them back in normalised form and optionally
shows or exports per-degree step tables.
"""

import argparse
import logging
import os
import sys
from typing import List, Optional, Tuple

import consts
import scl_io
import step_tables
import utils
from errors import ScaleFileError
from scale import Scale

logger = logging.getLogger("ellis")


def _detect_lang_from_argv(argv: List[str]) -> str:
    """Pre-scan di argv per estrarre --lang prima del parsing argparse."""
    for i, tok in enumerate(argv):
        if tok == "--lang" and i + 1 < len(argv):
            if argv[i + 1].lower() in ("it", "en"):
                return argv[i + 1].lower()
        elif tok.startswith("--lang="):
            lang_val = tok.split("=", 1)[1].strip().lower()
            if lang_val in ("it", "en"):
                return lang_val
    return "it"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ellis",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description=(
            f"{consts.__program_name__} - {utils.L('Codec per file di intonazione Scala', 'Scala tuning file codec')}\n"
            "\n"
            + utils.L(
                "Legge file .scl (o cartelle di file .scl), li ristampa in forma normalizzata\n"
                "e mostra o esporta le tabelle dei gradi (cents, offset 12-TET, Hz).\n",
                "Reads .scl files (or directories of .scl files), prints them back in\n"
                "normalised form and shows or exports degree tables (cents, 12-TET offset, Hz).\n",
            )
        ),
        epilog=(
            "Esempi / Examples:\n"
            "  ellis.py scl/\n"
            "  ellis.py --lang en --table --diapason 442 pythagorean.scl\n"
            "  ellis.py --output clean.scl messy.scl\n"
            "  ellis.py --export-excel out scl/\n"
        ),
    )

    grp_base = parser.add_argument_group(utils.L("Base", "Base"))
    grp_out = parser.add_argument_group(utils.L("Output", "Output"))

    parser.add_argument("inputs", nargs="+", metavar="INPUT",
                        help=utils.L("File .scl o cartelle", ".scl files or directories"))

    grp_base.add_argument("--lang", choices=["it", "en"], default="it",
                          help="Lingua dell'interfaccia / Interface language")
    grp_base.add_argument("-v", "--version", action="version",
                          version=f"%(prog)s {consts.__version__}")
    grp_base.add_argument("--diapason", type=float, default=consts.DEFAULT_DIAPASON,
                          help=(f"Diapason in Hz (default: {consts.DEFAULT_DIAPASON}) / "
                                f"A4 reference (diapason) in Hz (default: {consts.DEFAULT_DIAPASON})"))
    grp_base.add_argument("--basekey", type=int, default=consts.DEFAULT_BASEKEY,
                          help=(f"Nota base MIDI della 1/1 (default: {consts.DEFAULT_BASEKEY}) / "
                                f"Base MIDI note of the 1/1 (default: {consts.DEFAULT_BASEKEY})"))
    grp_base.add_argument("--strict", action="store_true",
                          help=utils.L("Interrompi al primo file non valido",
                                       "Stop at the first invalid file"))
    grp_base.add_argument("--log-file", default=consts.DEFAULT_LOG_FILE,
                          help=utils.L("File di log (vuoto per disattivarlo)",
                                       "Log file (empty to disable)"))
    grp_base.add_argument("--verbose", action="store_true",
                          help=utils.L("Log dettagliato su stderr", "Verbose logging to stderr"))

    grp_out.add_argument("--table", action="store_true",
                         help=utils.L("Stampa la tabella dei gradi", "Print the degree table"))
    grp_out.add_argument("--output", metavar="FILE",
                         help=utils.L("Scrive la scala normalizzata (un solo input)",
                                      "Write the normalised scale (single input only)"))
    grp_out.add_argument("--export-excel", metavar="BASE",
                         help=utils.L("Esporta le tabelle in BASE_scales.xlsx",
                                      "Export the tables to BASE_scales.xlsx"))
    return parser


def collect_scales(inputs: List[str], strict: bool) -> Tuple[List[Tuple[str, Scale]], int]:
    """Load the scales named by the inputs. Returns (scales, number of failures)."""
    scales: List[Tuple[str, Scale]] = []
    failures = 0
    for item in inputs:
        try:
            if os.path.isdir(item):
                scales.extend(scl_io.load_scales_from_dir(item, strict=strict))
            else:
                scales.append((item, scl_io.read_scale(item)))
        except ScaleFileError as e:
            failures += 1
            print(utils.L(f"Errore: {e}", f"Error: {e}"), file=sys.stderr)
            logger.error("%s", e)
            if strict:
                break
    return scales, failures


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point"""
    argv = list(sys.argv[1:] if argv is None else argv)
    utils.set_language(_detect_lang_from_argv(argv))

    parser = build_parser()
    args = parser.parse_args(argv)
    utils.setup_logging(args.log_file or None, verbose=args.verbose)

    if args.output and len(args.inputs) != 1:
        print(utils.L("Errore: --output richiede un solo input",
                      "Error: --output requires a single input"), file=sys.stderr)
        return 1

    scales, failures = collect_scales(args.inputs, args.strict)
    if failures and args.strict:
        return 1

    basenote_hz = utils.convert_midi_to_hz(args.basekey, args.diapason)

    for path, scale in scales:
        print(f"! {os.path.basename(path)}")
        print(scale, end="")
        if args.table:
            step_tables.print_step_table(scale, basenote_hz)

    if args.output:
        if len(scales) != 1:
            print(utils.L(f"Errore: --output richiede una sola scala, trovate {len(scales)}",
                          f"Error: --output requires exactly one scale, found {len(scales)}"), file=sys.stderr)
            return 1
        try:
            scl_io.write_scale(args.output, scales[0][1])
            utils.log_export_success(args.output)
        except ScaleFileError as e:
            utils.log_export_error(args.output, e.__cause__ or e)
            return 1

    if args.export_excel:
        xlsx_path = f"{args.export_excel}_scales.xlsx"
        try:
            step_tables.export_scale_excel(args.export_excel, [s for _, s in scales], basenote_hz)
        except OSError as e:
            utils.log_export_error(xlsx_path, e)
            return 1

    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())
