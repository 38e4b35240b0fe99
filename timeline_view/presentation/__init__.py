from .viewmodels import ZoomControlViewModel, LegendEntryViewModel

__all__ = ['ZoomControlViewModel', 'LegendEntryViewModel']
