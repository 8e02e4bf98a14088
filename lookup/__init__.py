"""Route 53 to ELB lookup stages.

- zones: hosted zone directory + longest-suffix search
- aliases: ELB alias classification by region
- correlate: load balancer DNS name suffix matching
- health: instance health for matched load balancers
- engine: the end-to-end run
"""

from lookup.engine import run_lookup
from lookup.zones import find, normalize_fqdn

__all__ = ["find", "normalize_fqdn", "run_lookup"]
