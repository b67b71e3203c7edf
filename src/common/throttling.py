from ninja_extra.throttling import AnonRateThrottle


class AnonDefaultThrottle(AnonRateThrottle):
    rate = "120/min"


class RegistrationThrottle(AnonRateThrottle):
    rate = "30/min"


class WriteThrottle(AnonRateThrottle):
    rate = "60/min"
