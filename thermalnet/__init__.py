"""
thermalnet - Hourly comparison of a shared geothermal thermal network
against individual air-source heat pumps.
"""

__version__ = "0.1.0"
