"""
Minimal custom runtime bootstrap.

Run inside an execution environment where AWS_LAMBDA_RUNTIME_API is set.
"""

from lambda_runtime import InvocationRequest, InvocationResponse, run_handler


def handler(request: InvocationRequest) -> InvocationResponse:
    return InvocationResponse.success('{"data": "hello world!"}', "application/json")


if __name__ == "__main__":
    run_handler(handler)
