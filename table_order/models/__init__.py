from table_order.models.preference import Preference
