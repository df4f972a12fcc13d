import argparse
import logging
import sys
import time

from dnc_hull import STRATEGIES, HullBuilder, HullConfig, PreconditionViolation
from geometry import convex_hull_andrew, sort_points, unique_points
from points_io import DISTRIBUTIONS, InputError, format_points, generate_points, load_points

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Divide and conquer convex hull')
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument('input', nargs='?', help='File with whitespace-separated x y pairs')
    source.add_argument('--generate', '-g', type=int, metavar='N', help='Use N random points instead of a file')
    parser.add_argument('--distribution', choices=DISTRIBUTIONS, default='uniform',
                        help='Distribution of generated points')
    parser.add_argument('--seed', type=int, default=42, help='Seed for generated points')
    parser.add_argument('--svg', metavar='OUT', help='Save points and hull to an image (format from suffix)')
    parser.add_argument('--show', action='store_true', help='Show points and hull in a window')
    parser.add_argument('--strategy', choices=STRATEGIES, default='recursive')
    parser.add_argument('--workers', type=int, default=4, help='Threads for the parallel strategy')
    parser.add_argument('--eps', type=float, default=0.0, help='Cross products within eps count as collinear')
    parser.add_argument('--exact', action='store_true', help='Use exact rational orientation tests')
    parser.add_argument('--check', action='store_true',
                        help='Validate hull invariants and compare with the monotone chain hull')
    parser.add_argument('--quiet', '-q', action='store_true', help='Do not list the input points')
    parser.add_argument('--verbose', '-v', action='store_true')
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format='%(asctime)s %(name)s %(levelname)s: %(message)s',
    )

    config = HullConfig(
        eps=args.eps,
        exact=args.exact,
        strategy=args.strategy,
        workers=args.workers,
        check_invariants=args.check,
    )

    try:
        if args.generate is not None:
            points = generate_points(args.generate, args.distribution, args.seed)
        else:
            points = load_points(args.input)

        if not args.quiet:
            print('Points:')
            print(format_points(points))
        print(f'{len(points)} total points.')

        builder = HullBuilder(config)
        start_time = time.time()
        hull = builder.compute(points)
        execution_time = time.time() - start_time
    except (InputError, PreconditionViolation) as e:
        logger.error('%s', e)
        return 1

    print(f'{len(hull)} points in hull.')
    print(format_points(hull))
    logger.info('hull computed in %.4f sec', execution_time)

    if args.check:
        reference = convex_hull_andrew(unique_points(sort_points(points)), builder.orientation)
        if set(reference) != set(hull):
            logger.error('hull differs from monotone chain hull: %s != %s', hull, reference)
            return 1
        print('Check passed.')

    if args.svg or args.show:
        from visualization import render

        if args.svg:
            render(points, hull, path=args.svg)
        if args.show:
            render(points, hull)

    return 0


if __name__ == '__main__':
    sys.exit(main())
