"""
Command Line Interface for building photo galleries.
"""

import argparse
import cProfile
import logging
from typing import List, Optional

from PIL import Image

from .build_progress import BuildProgress
from .crop_selector import CropSettings
from .errors import EmptyGalleryError, OutputDirectoryError
from .gallery_config import GalleryConfig
from .index_writer import IndexWriter
from .manifest import Manifest
from .pipeline import Pipeline
from .reporter import Reporter
from .scanner import Scanner


def setup_logging(verbosity: int) -> logging.Logger:
    """Configure logging."""
    level = logging.DEBUG if verbosity > 0 else logging.INFO

    logging.basicConfig(
        level=level,
        format='%(asctime)s [%(levelname)s] %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    if verbosity < 2:
        logging.getLogger('PIL').setLevel(logging.WARNING)

    return logging.getLogger('pixgallery')


def get_gallery_config(args: argparse.Namespace) -> GalleryConfig:
    """Build gallery configuration from CLI arguments."""
    crop = CropSettings()
    if args.crop_min_scale is not None:
        crop.min_scale = args.crop_min_scale

    config = GalleryConfig(
        output_dir=args.output or '',
        source_dir=args.source,
        title=args.title,
        thumb_width=args.thumb_width,
        thumb_height=args.thumb_height,
        small_width=args.small_width,
        small_height=args.small_height,
        verbosity=args.verbose,
        cpu_profile=args.cpuprofile,
        jpeg_quality=args.quality,
        resample=args.resample,
        crop=crop,
    )
    if args.workers:
        config.workers = args.workers
    return config


def cmd_build(args: argparse.Namespace) -> int:
    """Execute build command."""
    logger = setup_logging(args.verbose)

    config = get_gallery_config(args)
    errors = config.validate()
    if errors:
        for error in errors:
            logger.error(error)
        return 1

    logger.info(f"Source: {config.source_dir}")
    logger.info(f"Output: {config.output_dir}")
    logger.info(f"Small: {config.small_width}x{config.small_height}, "
                f"thumbnail: {config.thumb_width}x{config.thumb_height}")

    if args.limit:
        logger.info(f"Test mode: limiting to {args.limit} files")

    profiler = None
    if config.cpu_profile:
        profiler = cProfile.Profile()
        profiler.enable()

    try:
        scanner = Scanner(config.source_dir, exclude=[config.output_dir], logger=logger)
        pipeline = Pipeline(config, logger=logger)

        progress = None
        if not args.quiet:
            progress = BuildProgress(show_files=args.show_files, logger=logger)

        manifest = pipeline.run(scanner.scan(limit=args.limit), progress=progress)

        IndexWriter(logger=logger).write(manifest, config.index_path)
        if args.json:
            manifest.save(args.json)

        if not args.quiet and not args.show_files:
            print()
            Reporter().report_summary(manifest, pipeline.stats)

        return 0

    except OutputDirectoryError as e:
        logger.error(str(e))
        return 1
    except EmptyGalleryError as e:
        logger.error(str(e))
        return 1
    except OSError as e:
        logger.error(f"Failed to write gallery index: {e}")
        return 1
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130
    finally:
        if profiler is not None:
            profiler.disable()
            profiler.dump_stats(config.cpu_profile)
            logger.info(f"CPU profile written to {config.cpu_profile}")


def cmd_report(args: argparse.Namespace) -> int:
    """Execute report command."""
    logger = setup_logging(args.verbose)

    try:
        manifest = Manifest.load(args.manifest)
    except FileNotFoundError:
        logger.error(f"Manifest not found: {args.manifest}")
        return 1
    except (ValueError, KeyError) as e:
        logger.error(f"Failed to load manifest: {e}")
        return 1

    reporter = Reporter()
    if args.type == 'summary':
        reporter.report_summary(manifest)
    elif args.type == 'detailed':
        reporter.report_detailed(manifest)

    return 0


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog='pixgallery',
        description='Build a Hugo photo gallery from a directory of images',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Workflow:
  1. Build:  python -m pixgallery build -o content/gallery/trip -t "Trip"
  2. Report: python -m pixgallery report --manifest gallery.json

Re-running build only regenerates derivatives older than their source.
"""
    )

    subparsers = parser.add_subparsers(dest='command', help='Command to run')

    # Build command
    build_parser = subparsers.add_parser('build', help='Build gallery derivatives and index')
    build_parser.add_argument('-o', '--output', help='Output directory for the gallery (required)')
    build_parser.add_argument('-s', '--source', default='.', help='Source directory (default: .)')
    build_parser.add_argument('-t', '--title', default='', help='Gallery title')
    build_parser.add_argument('--tw', dest='thumb_width', type=int, default=256,
                              help='Thumbnail width (default: 256)')
    build_parser.add_argument('--th', dest='thumb_height', type=int, default=256,
                              help='Thumbnail height (default: 256)')
    build_parser.add_argument('--sw', dest='small_width', type=int, default=800,
                              help='Small width (default: 800)')
    build_parser.add_argument('--sh', dest='small_height', type=int, default=800,
                              help='Small height (default: 800)')
    build_parser.add_argument('-w', '--workers', type=int, metavar='N',
                              help='Worker threads (default: CPU count)')
    build_parser.add_argument('--quality', type=int, default=85, help='JPEG quality (default: 85)')
    build_parser.add_argument('--resample', default='LANCZOS',
                              choices=sorted(Image.Resampling.__members__),
                              help='Resampling filter (default: LANCZOS)')
    build_parser.add_argument('--crop-min-scale', type=float, metavar='F',
                              help='Smallest crop window as a fraction of the largest (default: 0.9)')
    build_parser.add_argument('--json', metavar='PATH', help='Also save the manifest as JSON')
    build_parser.add_argument('--cpuprofile', metavar='PATH', help='Write a CPU profile to PATH')
    build_parser.add_argument('--limit', type=int, metavar='N',
                              help='Limit to N files (for testing)')
    build_parser.add_argument('-q', '--quiet', action='store_true', help='Suppress progress output')
    build_parser.add_argument('--show-files', action='store_true',
                              help='Print each file as processed with result')
    build_parser.add_argument('-v', '--verbose', action='count', default=0,
                              help='Verbose logging (-vv includes Pillow)')

    # Report command
    report_parser = subparsers.add_parser('report', help='Generate reports from a JSON manifest')
    report_parser.add_argument('-m', '--manifest', required=True, help='Input manifest file')
    report_parser.add_argument('-t', '--type', choices=['summary', 'detailed'],
                               default='summary', help='Report type')
    report_parser.add_argument('-v', '--verbose', action='count', default=0,
                               help='Verbose logging')

    return parser


def main(args: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = create_parser()
    parsed_args = parser.parse_args(args)

    if not parsed_args.command:
        parser.print_help()
        return 1

    if parsed_args.command == 'build':
        return cmd_build(parsed_args)
    elif parsed_args.command == 'report':
        return cmd_report(parsed_args)

    return 1
