"""
Test-case synchronisation with Azure DevOps.

Reads local test-case definitions, fetches a personal access token from
Azure Key Vault and creates one Test Case work item per definition,
linking each into a configured plan/suite.

Run it with ``python -m testcase_sync`` or the ``sync-testcases`` script.
"""

__version__ = "1.0.0"
