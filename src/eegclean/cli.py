"""
CLI entrypoint for the artefact-cleaning pipeline.

Two thin commands:
  - clean: clean a segment stored as .npy (channels x samples) or .fif and print a summary
  - demo: build a synthetic fixture with an injected blink, clean it and print a summary

Usage:
  eegclean clean --input segment.npy --fs 250 --config configs/cleaning.yaml
  eegclean demo --channels 4 --duration 8 --blink 3
"""

from __future__ import annotations
import argparse
import json
from pathlib import Path
from typing import Any, Dict, List, Optional
import numpy as np

from .config import CleaningConfig
from .data.artefacts import add_artefact
from .data.synthetic import synthetic_multichannel
from .errors import EEGCleanError
from .pipeline import clean
from .utils.logger import get_logger, set_verbosity

logger = get_logger(__name__)


def _load_signal(path: Path, fs: Optional[float]) -> tuple[np.ndarray, float]:
    suffix = path.suffix.lower()
    if suffix == ".npy":
        if fs is None:
            raise SystemExit("--fs is required for .npy input")
        return np.load(path), fs
    if suffix == ".fif":
        import mne

        raw = mne.io.read_raw_fif(path, preload=True, verbose=False)
        return raw.get_data(), float(raw.info["sfreq"])
    raise SystemExit(f"Unsupported input format: {path.suffix} (expected .npy or .fif)")


def _config_from_args(args: argparse.Namespace) -> CleaningConfig:
    cfg = CleaningConfig.from_file(args.config) if args.config else CleaningConfig()
    overrides: Dict[str, Any] = {}
    if args.sensitivity is not None:
        overrides["sensitivity"] = args.sensitivity
    if args.seed is not None:
        overrides["random_state"] = args.seed
    if args.n_jobs is not None:
        overrides["n_jobs"] = args.n_jobs
    if args.plot:
        overrides["visualize"] = True
    return cfg.with_overrides(**overrides)


def _show_if_plotted(cfg: CleaningConfig) -> None:
    if cfg.visualize:
        import matplotlib.pyplot as plt

        plt.show()


def _add_common(p: argparse.ArgumentParser) -> None:
    p.add_argument("--config", type=str, default=None, help="YAML/JSON config with a 'cleaning' section")
    p.add_argument("--sensitivity", type=int, default=None, choices=(1, 2, 3), help="Wavelet sensitivity")
    p.add_argument("--seed", type=int, default=None, help="ICA random seed")
    p.add_argument("--n-jobs", type=int, default=None, help="Scoring threads (default: CPU count)")
    p.add_argument("--plot", action="store_true", help="Show raw vs cleaned plot")
    p.add_argument("--verbose", "-v", action="store_true")


def cli(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="eegclean")
    sub = parser.add_subparsers(dest="cmd", required=True)

    p_clean = sub.add_parser("clean", help="Clean an EEG segment and print what was removed")
    p_clean.add_argument("--input", required=True, help=".npy (channels x samples) or .fif file")
    p_clean.add_argument("--fs", type=float, default=None, help="Sampling rate (Hz), required for .npy")
    _add_common(p_clean)

    p_demo = sub.add_parser("demo", help="Clean a synthetic segment with an injected blink")
    p_demo.add_argument("--channels", type=int, default=4)
    p_demo.add_argument("--duration", type=float, default=8.0)
    p_demo.add_argument("--fs", type=float, default=250.0)
    p_demo.add_argument("--blink", type=float, default=3.0, help="Blink start time (s)")
    _add_common(p_demo)

    args = parser.parse_args(argv)
    set_verbosity(args.verbose)
    try:
        cfg = _config_from_args(args)
        if args.cmd == "clean":
            eeg, fs = _load_signal(Path(args.input), args.fs)
            logger.info("Loaded %s with shape %s", args.input, eeg.shape)
        else:
            rng = np.random.default_rng(args.seed)
            eeg, _ = synthetic_multichannel(args.channels, duration=args.duration, fs=args.fs, rng=rng)
            eeg = add_artefact(eeg, args.fs, rng=rng, blink=args.blink)
            fs = args.fs
        result = clean(eeg, fs, config=cfg)
    except EEGCleanError as exc:
        logger.error("%s: %s", type(exc).__name__, exc)
        return 2
    print(json.dumps(result.summary(), indent=2))
    _show_if_plotted(cfg)
    return 0


def main() -> None:
    raise SystemExit(cli())


if __name__ == "__main__":
    main()
