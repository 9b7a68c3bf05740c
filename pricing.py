def compute_trip_cost(distance_km: float, rate_per_km: float) -> float:
    """Cost of a completed trip: distance times the vehicle's per-km rate.

    No rounding is applied; the stored cost carries native float precision.
    """
    return distance_km * rate_per_km
