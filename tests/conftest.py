"""Shared metadata documents for the test suite."""
from __future__ import annotations

import pytest

V2_METADATA = """<?xml version="1.0" encoding="utf-8" standalone="yes"?>
<edmx:Edmx Version="1.0" xmlns:edmx="http://schemas.microsoft.com/ado/2007/06/edmx">
  <edmx:DataServices xmlns:m="http://schemas.microsoft.com/ado/2007/08/dataservices/metadata" m:DataServiceVersion="2.0">
    <Schema Namespace="NS" xmlns="http://schemas.microsoft.com/ado/2008/09/edm">
      <EntityType Name="Customer">
        <Key><PropertyRef Name="CustomerID"/></Key>
        <Property Name="CustomerID" Type="Edm.String" Nullable="false"/>
        <Property Name="CompanyName" Type="Edm.String"/>
        <NavigationProperty Name="Orders" Relationship="NS.Customer_Orders" FromRole="Customers" ToRole="Orders"/>
      </EntityType>
      <EntityType Name="Order">
        <Key><PropertyRef Name="OrderID"/></Key>
        <Property Name="OrderID" Type="Edm.Int32" Nullable="false"/>
        <Property Name="CustomerID" Type="Edm.String"/>
        <NavigationProperty Name="Customer" Relationship="NS.Customer_Orders" FromRole="Orders" ToRole="Customers"/>
        <NavigationProperty Name="Shipper" Relationship="Other.Order_Shipper" FromRole="Orders" ToRole="Shipper"/>
        <NavigationProperty Name="Ghost" Relationship="NS.Missing" FromRole="Orders" ToRole="Nowhere"/>
      </EntityType>
      <EntityType Name="Shipper">
        <Key><PropertyRef Name="ShipperID"/></Key>
        <Property Name="ShipperID" Type="Edm.Int32" Nullable="false"/>
      </EntityType>
      <EntityType Name="Employee">
        <Key><PropertyRef Name="EmployeeID"/></Key>
        <Property Name="EmployeeID" Type="Edm.Int32" Nullable="false"/>
        <Property Name="ReportsTo" Type="Edm.Int32"/>
        <NavigationProperty Name="Manager" Relationship="NS.Employee_Manager" FromRole="Employee" ToRole="Manager"/>
      </EntityType>
      <Association Name="Customer_Orders">
        <End Role="Customers" Type="NS.Customer" Multiplicity="0..1"/>
        <End Role="Orders" Type="NS.Order" Multiplicity="*"/>
        <ReferentialConstraint>
          <Principal Role="Customers"><PropertyRef Name="CustomerID"/></Principal>
          <Dependent Role="Orders"><PropertyRef Name="CustomerID"/></Dependent>
        </ReferentialConstraint>
      </Association>
      <Association Name="Order_Shipper">
        <End Role="Orders" Type="NS.Order" Multiplicity="*"/>
        <End Role="Shipper" Type="NS.Shipper" Multiplicity="0..1"/>
      </Association>
      <Association Name="Employee_Manager">
        <End Role="Employee" Type="NS.Employee" Multiplicity="*"/>
        <End Role="Manager" Type="NS.Employee" Multiplicity="0..1"/>
        <ReferentialConstraint>
          <Principal Role="Manager"><PropertyRef Name="EmployeeID"/></Principal>
          <Dependent Role="Employee"><PropertyRef Name="ReportsTo"/></Dependent>
        </ReferentialConstraint>
      </Association>
    </Schema>
  </edmx:DataServices>
</edmx:Edmx>
"""

V4_METADATA = """<?xml version="1.0" encoding="utf-8"?>
<edmx:Edmx Version="4.0" xmlns:edmx="http://docs.oasis-open.org/odata/ns/edmx">
  <edmx:DataServices>
    <Schema Namespace="NS" xmlns="http://docs.oasis-open.org/odata/ns/edm">
      <EntityType Name="Customer">
        <Key><PropertyRef Name="ID"/></Key>
        <Property Name="ID" Type="Edm.Int32" Nullable="false"/>
        <Property Name="Name" Type="Edm.String"/>
        <NavigationProperty Name="Orders" Type="Collection(NS.Order)" Partner="Customer"/>
      </EntityType>
      <EntityType Name="Order">
        <Key><PropertyRef Name="ID"/></Key>
        <Property Name="ID" Type="Edm.Int32" Nullable="false"/>
        <Property Name="CustomerID" Type="Edm.Int32"/>
        <NavigationProperty Name="Customer" Type="NS.Customer" Nullable="false" Partner="Orders">
          <ReferentialConstraint Property="CustomerID" ReferencedProperty="ID"/>
        </NavigationProperty>
      </EntityType>
      <EntityType Name="Product">
        <Key><PropertyRef Name="ID"/></Key>
        <Property Name="ID" Type="Edm.Int32" Nullable="false"/>
      </EntityType>
    </Schema>
    <Schema Namespace="Default" xmlns="http://docs.oasis-open.org/odata/ns/edm">
      <EntityContainer Name="Container">
        <EntitySet Name="Customers" EntityType="NS.Customer"/>
      </EntityContainer>
    </Schema>
  </edmx:DataServices>
</edmx:Edmx>
"""


@pytest.fixture
def v2_metadata() -> str:
    return V2_METADATA


@pytest.fixture
def v4_metadata() -> str:
    return V4_METADATA
