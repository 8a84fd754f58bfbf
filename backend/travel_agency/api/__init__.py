from travel_agency.storage.registry import TravelRegistry


def get_registry() -> TravelRegistry:
    # one registry per command batch, discarded with the request
    return TravelRegistry()
