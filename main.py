import argparse
import logging

from golddensity import BatchDensityAnalyzer, Config, InteractiveRegionSelector, RoiSetSelector


"""
メインプロセスの記述する箇所
微調整するときはここか golddensity/config.py を編集する。
"""


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Count particles per pyrenoid / cytoplasm region and tabulate densities.")
    parser.add_argument("folder", help="folder containing <name>.tif and <name>_seg.tif pairs")
    parser.add_argument("--replay", action="store_true", help="reuse saved <name>_rois.zip instead of drawing regions")
    parser.add_argument("--pixel-size", type=float, default=Config.PIXEL_SIZE, help="length of one pixel")
    parser.add_argument("--bandpass", action="store_true", help="apply the FFT bandpass filter before detection")
    parser.add_argument("--dark-particles", action="store_true", help="particles are darker than background")
    parser.add_argument("--no-summary", action="store_true", help="do not write the per-label summary CSV")
    parser.add_argument("--plot", action="store_true", help="save a density box plot per label")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser.parse_args(argv)


def main(argv=None):
    """メイン処理"""
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = Config()
    config.PIXEL_SIZE = args.pixel_size
    config.APPLY_BANDPASS = args.bandpass
    config.DARK_PARTICLES = args.dark_particles

    selector = RoiSetSelector() if args.replay else InteractiveRegionSelector()
    batch_analyzer = BatchDensityAnalyzer(config, selector)

    table = batch_analyzer.run_analysis(args.folder)
    batch_analyzer.export_results(table, args.folder)
    if not args.no_summary:
        batch_analyzer.output_summary_csv(table, args.folder)
    if args.plot:
        batch_analyzer.plot_density(table, args.folder)


if __name__ == "__main__":
    main()
