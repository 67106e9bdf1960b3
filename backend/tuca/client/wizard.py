"""
Multi-step travel preferences questionnaire shown during sign-up
"""

from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Any, Dict, List, Optional

MIN_GROUP_SIZE = 1
MAX_GROUP_SIZE = 10

ACTIVITY_LEVELS = {
    "low": "Relaxed",
    "medium": "Balanced",
    "high": "Adventurous",
}
ACCOMMODATION_TYPES = {
    "budget": "Budget-friendly",
    "mid-range": "Mid-range",
    "luxury": "Luxury",
}
TRANSPORT_OPTIONS = {
    "guided-tour": "Guided Tours",
    "rental": "Vehicle Rental",
    "public": "Public Transport",
}
INTEREST_OPTIONS = [
    "Beach Activities",
    "Wildlife",
    "Diving",
    "Hiking",
    "Photography",
    "Marine Life",
    "Boat Tours",
    "Local Culture",
    "Gastronomy",
    "Eco-tourism",
    "Sunset Viewing",
    "Surfing",
    "Snorkeling",
    "Bird Watching",
]
DIETARY_OPTIONS = [
    "Vegetarian",
    "Vegan",
    "Gluten-free",
    "Lactose-free",
    "Pescatarian",
    "No Restrictions",
    "Kosher",
    "Halal",
    "Low-carb",
    "Allergies (specify in notes)",
]


@dataclass(frozen=True)
class Step:
    title: str
    description: str


STEPS = [
    Step("Travel Dates", "When are you planning to visit Fernando de Noronha?"),
    Step("Group Size", "How many people will be traveling with you?"),
    Step("Interests", "What activities interest you the most?"),
    Step("Accommodation", "What type of accommodation do you prefer?"),
    Step("Dietary Preferences", "Do you have any dietary preferences or restrictions?"),
    Step("Activity Level", "What's your preferred level of activity during your trip?"),
    Step("Transportation", "How would you like to get around the island?"),
    Step("Special Requirements", "Do you have any special needs or requests?"),
    Step("Previous Visit", "Have you visited Fernando de Noronha before?"),
]


@dataclass
class TravelPreferencesData:
    arrival: Optional[date]
    departure: Optional[date]
    group_size: int = 2
    travel_interests: List[str] = field(default_factory=list)
    accommodation_preference: str = ""
    dietary_restrictions: List[str] = field(default_factory=list)
    activity_level: str = ""
    transport_preference: str = ""
    special_requirements: str = ""
    previous_visit: bool = False


class TravelPreferencesWizard:
    def __init__(self, today: Optional[date] = None):
        today = today or date.today()
        # A week-long trip a month from now
        self.prefs = TravelPreferencesData(
            arrival=today + timedelta(days=30),
            departure=today + timedelta(days=37),
        )
        self.current_step = 0

    @property
    def step(self) -> Step:
        return STEPS[self.current_step]

    @property
    def progress(self) -> float:
        return (self.current_step + 1) / len(STEPS) * 100

    @property
    def is_last_step(self) -> bool:
        return self.current_step == len(STEPS) - 1

    def is_step_complete(self) -> bool:
        p = self.prefs
        checks = [
            p.arrival is not None and p.departure is not None,
            p.group_size > 0,
            len(p.travel_interests) > 0,
            bool(p.accommodation_preference),
            True,  # dietary preferences are optional
            bool(p.activity_level),
            bool(p.transport_preference),
            True,  # special requirements are optional
            True,  # previous visit defaults to False
        ]
        return checks[self.current_step]

    def next(self) -> Optional[TravelPreferencesData]:
        """Advance one step; on the last step return the finished preferences"""
        if not self.is_step_complete():
            raise ValueError(f"Step '{self.step.title}' is not complete")
        if self.is_last_step:
            return self.prefs
        self.current_step += 1
        return None

    def back(self) -> None:
        if self.current_step > 0:
            self.current_step -= 1

    # ===== SETTERS =====

    def set_travel_dates(self, arrival: date, departure: date) -> None:
        if departure < arrival:
            raise ValueError("Departure date must be on or after arrival date")
        self.prefs.arrival = arrival
        self.prefs.departure = departure

    def set_group_size(self, size: int) -> None:
        if not MIN_GROUP_SIZE <= size <= MAX_GROUP_SIZE:
            raise ValueError(f"Group size must be between {MIN_GROUP_SIZE} and {MAX_GROUP_SIZE}")
        self.prefs.group_size = size

    def increment_group(self) -> None:
        if self.prefs.group_size < MAX_GROUP_SIZE:
            self.prefs.group_size += 1

    def decrement_group(self) -> None:
        if self.prefs.group_size > MIN_GROUP_SIZE:
            self.prefs.group_size -= 1

    def toggle_interest(self, interest: str) -> None:
        if interest not in INTEREST_OPTIONS:
            raise ValueError(f"Unknown interest: {interest}")
        _toggle(self.prefs.travel_interests, interest)

    def toggle_dietary(self, option: str) -> None:
        if option not in DIETARY_OPTIONS:
            raise ValueError(f"Unknown dietary option: {option}")
        _toggle(self.prefs.dietary_restrictions, option)

    def set_accommodation(self, value: str) -> None:
        if value not in ACCOMMODATION_TYPES:
            raise ValueError(f"Unknown accommodation type: {value}")
        self.prefs.accommodation_preference = value

    def set_activity_level(self, value: str) -> None:
        if value not in ACTIVITY_LEVELS:
            raise ValueError(f"Unknown activity level: {value}")
        self.prefs.activity_level = value

    def set_transport(self, value: str) -> None:
        if value not in TRANSPORT_OPTIONS:
            raise ValueError(f"Unknown transport option: {value}")
        self.prefs.transport_preference = value

    def set_special_requirements(self, text: str) -> None:
        self.prefs.special_requirements = text

    def set_previous_visit(self, visited: bool) -> None:
        self.prefs.previous_visit = visited

    # ===== OUTPUT =====

    def assistant_message(self) -> str:
        p = self.prefs
        step = self.current_step

        if step == 0:
            return (
                "Hello! I'm your Tuca Noronha travel assistant. Let's customize your paradise "
                "experience! When are you planning to visit?"
            )
        if step == 1:
            total_days = (p.departure - p.arrival).days
            return (
                f"A {total_days}-day trip in {p.arrival.strftime('%B')} is a great choice! The weather "
                "is typically pleasant during that time. How many travelers will join this adventure?"
            )
        if step == 2:
            people = "people" if p.group_size > 1 else "person"
            return (
                f"Fantastic! Planning for {p.group_size} {people}. Fernando de Noronha offers diverse "
                "experiences - what activities interest your group the most?"
            )
        if step == 3:
            if p.travel_interests:
                return (
                    f"{p.travel_interests[0]} is an excellent choice! We have some amazing spots for that. "
                    "Now, what type of accommodation would make your stay perfect?"
                )
            return "Let's find you the perfect place to stay. What type of accommodation are you looking for?"
        if step == 4:
            if p.accommodation_preference == "luxury":
                return (
                    "Our luxury accommodations offer spectacular ocean views and premium amenities. Do you "
                    "have any dietary preferences we should know about for restaurant recommendations?"
                )
            if p.accommodation_preference == "mid-range":
                return (
                    "Great choice! Our mid-range options offer excellent value and comfort. Any dietary "
                    "preferences we should consider when suggesting restaurants?"
                )
            return (
                "Our budget-friendly options still provide the perfect base for your island adventure. "
                "Do you have any dietary preferences?"
            )
        if step == 5:
            if p.dietary_restrictions:
                return (
                    "Thanks for sharing your dietary preferences. I'll keep that in mind for restaurant "
                    "recommendations. What's your preferred activity level for this trip?"
                )
            return (
                "Fernando de Noronha offers everything from relaxing beaches to challenging hikes. "
                "What's your preferred activity level?"
            )
        if step == 6:
            if p.activity_level == "high":
                return (
                    "You're looking for adventure! Our expert guides can show you the most thrilling "
                    "experiences on the island. How would you prefer to get around?"
                )
            if p.activity_level == "medium":
                return (
                    "A balanced approach will give you the perfect mix of relaxation and adventure. "
                    "What's your preferred transportation method?"
                )
            return "A relaxing vacation awaits you! How would you like to explore the island at your own pace?"
        if step == 7:
            return (
                "We want to ensure your comfort throughout your stay. Do you have any special "
                "requirements or requests?"
            )
        return (
            "Just one more question to help personalize your experience. Have you visited "
            "Fernando de Noronha before?"
        )

    def to_payload(self) -> Dict[str, Any]:
        """camelCase fields accepted by the registration endpoint"""
        p = self.prefs
        payload: Dict[str, Any] = {
            "groupSize": p.group_size,
            "travelInterests": list(p.travel_interests),
            "dietaryRestrictions": list(p.dietary_restrictions),
            "previousVisit": p.previous_visit,
        }
        if p.arrival and p.departure:
            payload["travelDates"] = {"from": p.arrival.isoformat(), "to": p.departure.isoformat()}
        if p.accommodation_preference:
            payload["accommodationPreference"] = p.accommodation_preference
        if p.activity_level:
            payload["activityLevel"] = p.activity_level
        if p.transport_preference:
            payload["transportPreference"] = p.transport_preference
        if p.special_requirements:
            payload["specialRequirements"] = p.special_requirements
        return payload


def _toggle(values: List[str], value: str) -> None:
    if value in values:
        values.remove(value)
    else:
        values.append(value)
