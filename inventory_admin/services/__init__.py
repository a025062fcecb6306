from .dashboard_service import DashboardService, DashboardStats

__all__ = [
    'DashboardService',
    'DashboardStats',
]
