"""boto3 adapter for Route 53 and classic ELB."""
