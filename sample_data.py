from db import init_db
from users import signup
from vehicles import add_vehicle, assign_driver
import random


def seed():
    init_db()
    tag = random.randint(1000, 9999)
    owners = [
        signup({"name": f"owner{i}", "email": f"owner{i}.{tag}@fleet.test", "password": "secret", "role": "owner"})
        for i in range(1, 4)
    ]
    drivers = [
        signup({"name": f"driver{i}", "email": f"driver{i}.{tag}@fleet.test", "password": "secret", "role": "driver"})
        for i in range(1, 6)
    ]
    customers = [
        signup({"name": f"customer{i}", "email": f"customer{i}.{tag}@fleet.test", "password": "secret", "role": "customer"})
        for i in range(1, 11)
    ]
    vehicles = []
    for i in range(1, 11):
        owner = owners[(i - 1) % len(owners)]
        v = add_vehicle({
            "name": random.choice(["Sedan", "Hatchback", "SUV", "Van"]),
            "registration_number": f"FL-{tag}-{i:03d}",
            "allowed_passengers": random.choice([2, 4, 5, 7]),
            "rate_per_km": round(random.uniform(8.0, 20.0), 2),
            "owner_id": owner.id,
        })
        # half the fleet gets a driver
        if i % 2 == 0:
            v = assign_driver(v.id, {"driver_id": drivers[(i // 2 - 1) % len(drivers)].id})
        vehicles.append(v)
    print(f"Seeded {len(owners)} owners, {len(drivers)} drivers, {len(customers)} customers, {len(vehicles)} vehicles")
    return {"owners": owners, "drivers": drivers, "customers": customers, "vehicles": vehicles}


if __name__ == "__main__":
    seed()
