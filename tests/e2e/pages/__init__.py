"""
Page Object Model (POM) classes for the support site.

This package contains page objects that encapsulate page-specific
locators and interactions, keeping selectors out of the scenarios.
"""

from tests.e2e.pages.base_page import BasePage
from tests.e2e.pages.home_page import XboxSupportHomePage
from tests.e2e.pages.report_outage_dialog import ReportOutageDialog, WhatsNotWorkingOption
from tests.e2e.pages.search_results_page import SearchResultsPage
from tests.e2e.pages.status_page import XboxService, XboxStatusPage

__all__ = [
    "BasePage",
    "ReportOutageDialog",
    "SearchResultsPage",
    "WhatsNotWorkingOption",
    "XboxService",
    "XboxStatusPage",
    "XboxSupportHomePage",
]
