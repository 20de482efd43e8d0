from .people import Person, PersonCreate, PersonRead, build_search_field
