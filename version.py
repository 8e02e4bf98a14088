"""Project version constants.

These constants are printed by ``r53elb --print-version`` and embedded in the
botocore user agent so that API calls can be traced back to a tool release.
"""

TOOL_NAME: str = "r53elb"
TOOL_VERSION: str = "0.1.0"
