from car_rental import create_app
from car_rental.models import db, User, Vehicle
from car_rental.utils.security import generate_hash

DEMO_USERS = [
    # email, password, first, last, role
    ("admin@carrental.local", "Admin123", "System", "Admin", "Admin"),
    ("manager@carrental.local", "Manager123", "Fleet", "Manager", "Manager"),
    ("customer@carrental.local", "Customer123", "Demo", "Customer", "Customer"),
]

DEMO_VEHICLES = [
    {"vehicle_type": "Private Car", "model": "Toyota Corolla", "year": 2020, "registration_number": "DHA-GA-1001",
     "chassis_number": "JTDBR32E720000001", "color": "White", "engine_capacity": "1500cc", "fuel_type": "Petrol",
     "daily_rate": 45, "seats": 5, "features": "AC,GPS,Bluetooth"},
    {"vehicle_type": "Motor Bike", "model": "Yamaha FZ", "year": 2022, "registration_number": "DHA-HA-2002",
     "chassis_number": "ME1RG0720N0000002", "color": "Blue", "engine_capacity": "150cc", "fuel_type": "Petrol",
     "daily_rate": 12, "seats": 2, "features": ""},
    {"vehicle_type": "Pickup", "model": "Toyota Hilux", "year": 2019, "registration_number": "DHA-NA-3003",
     "chassis_number": "MR0FR22G900000003", "color": "Silver", "engine_capacity": "2400cc", "fuel_type": "Diesel",
     "daily_rate": 80, "seats": 5, "features": "AC,4WD"},
    {"vehicle_type": "Truck", "model": "Isuzu N-Series", "year": 2018, "registration_number": "DHA-TA-4004",
     "chassis_number": "JAANPR71H800000004", "color": "Red", "engine_capacity": "5200cc", "fuel_type": "Diesel",
     "daily_rate": 120, "seats": 3, "features": "Power Steering"},
]


def ensure_user(email, password, first, last, role):
    """
    Ensure a user with `email` exists.
    - If exists: update password hash and role (idempotent).
    - If not:   create a new user.
    """
    user = User.query.filter_by(email=email).first()
    if user is None:
        user = User(email=email, first_name=first, last_name=last, phone_number="01700000000")
        db.session.add(user)
    user.password = generate_hash(password)
    user.role = role
    user.is_active = True
    return user


def main():
    app = create_app()
    with app.app_context():
        for row in DEMO_USERS:
            ensure_user(*row)

        # Demo vehicles are created only if the fleet is empty
        if Vehicle.query.count() == 0:
            for data in DEMO_VEHICLES:
                db.session.add(Vehicle(**data))

        db.session.commit()

        print("✅ Seed complete.")
        for email, password, _, _, role in DEMO_USERS:
            print(f"🔑 {role:<8} login: {email} / {password}")


if __name__ == "__main__":
    main()
