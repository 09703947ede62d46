"""GraphQL document for company -> shipments -> kits.

Bump SHIPMENT_QUERY_VERSION whenever the selected fields change so the
projector and any cached fixtures can be checked against it.
"""

SHIPMENT_QUERY_VERSION = "2023.1"

OPERATION_NAME = "shipmentData"

# Variable declared by the document; callers supply the company id under it.
COMPANY_ID_VARIABLE = "hs_object_id"

SHIPMENTS_ASSOCIATION = "p_shipments_collection__shipments_to_company"
KITS_ASSOCIATION = "p_kits_collection__shipments_to_kits"

SHIPMENT_QUERY = f"""
query {OPERATION_NAME}(${COMPANY_ID_VARIABLE}: String!) {{
  CRM {{
    company(uniqueIdentifier: "hs_object_id", uniqueIdentifierValue: ${COMPANY_ID_VARIABLE}) {{
      associations {{
        {SHIPMENTS_ASSOCIATION} {{
          items {{
            hs_object_id
            year
            order_num
            description
            status
            carrier
            tracking_num
            associations {{
              {KITS_ASSOCIATION} {{
                items {{
                  year
                  kit_number
                  status
                  hold_reason
                }}
              }}
            }}
          }}
        }}
      }}
    }}
  }}
}}
"""
