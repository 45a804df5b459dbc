# client/gen_data.py
import random

FIRST  = ["Olivia","Amelia","Isla","Ava","Freya","Oliver","George","Arthur","Noah","Leo","Harry","Theo"]
PARENT = ["Jane","Sarah","Emma","Claire","David","James","Richard","Mark","Priya","Wei","Carlos","Fatima"]
LAST   = ["Smith","Jones","Taylor","Brown","Williams","Patel","Chen","Garcia","Wilson","Evans","Khan","Davies"]
SUBJECTS   = ["Sciences","Mathematics","English","History","Languages","Art","Music","Drama","Computing","Economics"]
ACTIVITIES = ["Drama","Music","Debating","Chess","CCF","Duke of Edinburgh","Robotics","Choir","Art Club"]
SPORTS     = ["Rugby","Hockey","Netball","Cricket","Tennis","Rowing","Swimming","Athletics","Football"]

# Values the old and new form builds have been seen to post
STAGE_VALUES    = ["Lower","Upper","Senior","13-14","13–14","16-18","UPPER"," lower "]
GENDER_VALUES   = ["Female","Male","f","M","female","male",""]
BOARDING_VALUES = ["Full Boarding","Day","Considering Both","boarding","boarder","day","considering"]

def _email(first, last): return f"{first.lower()}.{last.lower()}{random.randint(1,99)}@example.com"
def _phone(): return f"07{random.randint(100,999)} {random.randint(100000,999999)}"
def _some(pool, lo=0, hi=3): return random.sample(pool, k=random.randint(lo, hi))

def gen_enquiry_form(legacy: bool = False):
    """
    A plausible form submission. With legacy=True the older key names
    (childAge/childGender/boarding) and flat priority fields are used.
    """
    parent_first, last = random.choice(PARENT), random.choice(LAST)
    form = {
        "childName": random.choice(FIRST),
        "parentName": f"{parent_first} {last}",
        "email": _email(parent_first, last),
        "phone": _phone(),
        "academicInterests": _some(SUBJECTS, 1, 3),
        "activities": _some(ACTIVITIES),
        "specificSports": _some(SPORTS),
        "universityAspirations": random.choice(["", "Oxbridge", "Medicine", "US college", "Undecided"]),
        "additionalInfo": random.choice(["", "Would like a tour", "Sibling already at the school"]),
    }
    scores = {k: random.randint(1, 3) for k in ("academic", "sports", "pastoral", "activities")}
    if legacy:
        form["childAge"] = random.choice(STAGE_VALUES)
        form["childGender"] = random.choice(GENDER_VALUES)
        form["boarding"] = random.choice(BOARDING_VALUES)
        form.update({k: str(v) for k, v in scores.items() if k != "activities"})
        # a single activity was posted as a bare string by the old form
        if form["activities"]:
            form["activities"] = form["activities"][0]
    else:
        form["stage"] = random.choice(STAGE_VALUES)
        form["gender"] = random.choice(GENDER_VALUES)
        form["boardingPreference"] = random.choice(BOARDING_VALUES)
        form["priorities"] = scores
    return form
