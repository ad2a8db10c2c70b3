"""
Select the platform helpers for the current runtime.

Inside AWS Lambda parameters come from SSM Parameter Store and logs go to CloudWatch;
everywhere else parameters come from environment variables.
"""

import os

if os.getenv("AWS_LAMBDA_FUNCTION_NAME"):
    from chatgpt_share_api.infrastructure.aws_platform_manager import (  # noqa: F401
        create_logger,
        get_parameters,
    )
else:
    from chatgpt_share_api.infrastructure.local_platform_manager import (  # noqa: F401
        create_logger,
        get_parameters,
    )
