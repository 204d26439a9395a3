"""List the Lambda functions visible to the plugin, or check one of them."""

from __future__ import annotations

import argparse

from loguru import logger

from lambda_attach.application.function_registry import FunctionRegistry
from lambda_attach.infrastructure import configure_logging, get_settings
from lambda_attach.infrastructure.aws.lambda_client import LambdaGateway


def main() -> int:
    parser = argparse.ArgumentParser(description="List Lambda functions available for processing")
    parser.add_argument("--check", default=None, help="Exit with status 1 unless this function is available")
    parser.add_argument("--master-region", default=None, help="Lambda@Edge master region to filter on")
    parser.add_argument("--items", type=int, default=100, help="Maximum number of functions to fetch")
    args = parser.parse_args()

    settings = get_settings()
    configure_logging(settings)

    registry = FunctionRegistry(LambdaGateway.from_settings(settings))
    functions = registry.list_functions(force=True, master_region=args.master_region, items=args.items)

    if args.check:
        if registry.available(args.check):
            print(f"{args.check} is available")
            return 0
        logger.error(f"Function {args.check} not available on Lambda!")
        return 1

    for function in functions:
        print(f"{function.function_name}\t{function.runtime or '-'}\t{function.function_arn or ''}")
    print(f"{len(functions)} functions")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
