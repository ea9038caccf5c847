"""
CLI entry point for evaluating a k-nearest-neighbour classifier.

Usage with data files:
    python main.py data/train.txt data/test.txt
    python main.py data/train.txt data/test.txt -k 5 --kernel unrolled

Usage with config file (single evaluation):
    python main.py -c config/classifier.toml

Usage with batch config file (multiple evaluations):
    python main.py -c config/batch.toml --batch
"""
import argparse
import logging
import sys

from src.domain.errors import (
    EmptyDatasetError,
    InstanceParseError,
    LengthMismatchError,
    ShapeMismatchError,
)
from src.domain.use_cases.evaluate_classifier import EvaluateClassifier, EvaluationResult
from src.infrastructure.configuration import (
    BatchEvaluationConfiguration,
    ClassifierConfiguration,
)
from src.infrastructure.kernels.dispatch import AUTO, KERNEL_NAMES, select_kernel
from src.infrastructure.loaders import TextInstanceLoader
from src.infrastructure.logging import setup_logging
from src.infrastructure.metrics import EuclideanDistanceMetric
from src.infrastructure.observability import ConsoleTracker, SilentTracker

logger = logging.getLogger(__name__)


def parse_args(argv=None):
    """
    Parse command-line arguments.

    Parameters
    ----------
    argv : list[str] | None
        Command-line arguments. If None, uses sys.argv.

    Returns
    -------
    argparse.Namespace
        Parsed arguments.
    """
    parser = argparse.ArgumentParser(
        description="Evaluate a k-nearest-neighbour classifier on a test set."
    )
    parser.add_argument(
        "train",
        nargs="?",
        help="Training data: one '<label> <feature> <feature> ...' line per instance",
    )
    parser.add_argument(
        "test",
        nargs="?",
        help="Test data, in the same format as the training data",
    )
    parser.add_argument(
        "-c",
        "--config",
        help="Path to TOML configuration file (if provided, other args are ignored)",
    )
    parser.add_argument(
        "-k",
        "--knearest",
        dest="k",
        type=int,
        default=3,
        help="Number of nearest neighbors to consider in voting (default: 3)",
    )
    parser.add_argument(
        "--kernel",
        choices=[AUTO, *KERNEL_NAMES],
        default=AUTO,
        help="Reduction kernel used for distances (default: auto)",
    )
    parser.add_argument(
        "--no-progress",
        action="store_true",
        help="Disable the progress bar",
    )
    parser.add_argument(
        "--batch",
        action="store_true",
        help="Enable batch mode (config file must contain [batch] section)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    return parser.parse_args(argv)


def evaluate_single(config: ClassifierConfiguration) -> EvaluationResult:
    """
    Run one evaluation with the given configuration.

    Parameters
    ----------
    config : ClassifierConfiguration
        Configuration for the evaluation run.

    Returns
    -------
    EvaluationResult
        Accuracy and counts of the run.
    """
    loader = TextInstanceLoader()
    train_instances = loader.load(config.train)
    test_instances = loader.load(config.test)
    logger.info(
        f"Loaded {len(train_instances)} training and {len(test_instances)} test instances"
    )

    metric = EuclideanDistanceMetric(kernel=select_kernel(config.kernel))
    tracker = ConsoleTracker() if config.show_progress else SilentTracker()

    use_case = EvaluateClassifier(
        train_instances=train_instances,
        test_instances=test_instances,
        k=config.k,
        metric=metric,
        tracker=tracker,
    )
    result = use_case.run()
    print(f"Accuracy: {result.accuracy_percent:.1f}")
    return result


def main(argv=None) -> int:
    """
    Main entry point for classifier evaluation.

    Parameters
    ----------
    argv : list[str] | None
        Command-line arguments. If None, uses sys.argv.

    Returns
    -------
    int
        Process exit status: 0 on success, 1 if a dataset is unreadable,
        empty or inconsistent.
    """
    args = parse_args(argv)
    setup_logging(verbose=args.verbose)

    # Batch evaluation mode
    if args.batch:
        if not args.config:
            raise ValueError("--batch requires --config to be specified")
        batch_config = BatchEvaluationConfiguration.load(args.config)
        total = len(batch_config.evaluations)
        if total == 0:
            raise ValueError(f"Empty batch configuration in {args.config}")
        configs = batch_config.evaluations
        logger.info(f"Starting batch evaluation with {total} configurations")

    # Single evaluation mode
    elif args.config:
        configs = [ClassifierConfiguration.load(args.config)]
    else:
        # Validate required args when not using config file
        if not args.train or not args.test:
            raise ValueError("Either --config or both TRAIN and TEST are required")
        configs = [
            ClassifierConfiguration(
                train=args.train,
                test=args.test,
                k=args.k,
                kernel=args.kernel,
                show_progress=not args.no_progress,
            )
        ]

    for i, config in enumerate(configs, start=1):
        if len(configs) > 1:
            logger.info(f"[{i}/{len(configs)}] Evaluating k={config.k} on {config.test}")
        try:
            evaluate_single(config)
        except (FileNotFoundError, InstanceParseError) as error:
            logger.error(f"Cannot read instances: {error}")
            return 1
        except (LengthMismatchError, ShapeMismatchError) as error:
            logger.error(f"Inconsistent feature vectors: {error}")
            return 1
        except EmptyDatasetError as error:
            logger.error(f"Nothing to evaluate: {error}")
            return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
