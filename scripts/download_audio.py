#!/usr/bin/env python3
"""
Fetch the EveryAyah MP3 files of one or more Manzils or Juz for offline use.

Usage:
    python scripts/download_audio.py --manzil 7
    python scripts/download_audio.py --juz 29 30 --reciter Husary_128kbps
    python scripts/download_audio.py --list-reciters
"""
import argparse
import asyncio
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "backend"))

logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

# EveryAyah folder names
EVERYAYAH_RECITERS = [
    "Alafasy_128kbps",
    "Husary_128kbps",
    "Minshawy_Murattal_128kbps",
    "Abdul_Basit_Murattal_192kbps",
    "Abdurrahmaan_As-Sudais_192kbps",
    "Abu_Bakr_Ash-Shaatree_128kbps",
    "Ghamadi_40kbps",
    "Maher_AlMuaiqly_128kbps",
    "Yasser_Ad-Dussary_128kbps",
]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Download per-ayah recitation audio by Manzil or Juz")
    units = parser.add_mutually_exclusive_group()
    units.add_argument("--manzil", nargs="+", type=int, metavar="N", help="Manzil numbers (1-7)")
    units.add_argument("--juz", nargs="+", type=int, metavar="N", help="Juz numbers (1-30)")
    parser.add_argument("--reciter", choices=EVERYAYAH_RECITERS, help="Defaults to DEFAULT_RECITER")
    parser.add_argument("--audio-dir", help="Defaults to AUDIO_DIR")
    parser.add_argument("--list-reciters", action="store_true")
    return parser


async def main():
    parser = build_parser()
    args = parser.parse_args()

    if args.list_reciters:
        for name in EVERYAYAH_RECITERS:
            print(name)
        return
    if not (args.manzil or args.juz):
        parser.error("pass --manzil or --juz")

    from config import get_settings
    from errors import InvalidInput
    from services.audio.downloader import download_unit
    from utils.partitions import PartitionKind, get_partition

    kind = PartitionKind.MANZIL if args.manzil else PartitionKind.JUZ
    numbers = args.manzil or args.juz
    reciter = args.reciter or get_settings().DEFAULT_RECITER

    partition = get_partition(kind)
    for number in numbers:
        try:
            partition.get_unit(number)
        except InvalidInput as e:
            parser.error(e.message)

    total = 0
    for number in numbers:
        total += await download_unit(kind, number, reciter, audio_dir=args.audio_dir)
    print(f"{total} files in place for {kind.value} {', '.join(map(str, numbers))} ({reciter})")


if __name__ == "__main__":
    asyncio.run(main())
